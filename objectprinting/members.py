"""
Member discovery and member selectors.

Members are the public data attributes of an object: annotated fields, __slots__ entries,
plain instance attributes, and properties. Each member is identified by the class that
declares it, its name, and its declared value type, so configuration registered for a base
class member also applies to subclasses.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import functools
import inspect
import logging
import types
import typing
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Iterator, Literal, Union, get_args, get_origin

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import ConfigurationError, MissingSelectorError
from .utils import class_name, fmt_type, fmt_value

logger = logging.getLogger(__name__)

_MISSING = object()


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class MemberIdentifier:
    """
    Stable key of a field or property used to target exclusions and overrides.

    Attributes:
        declaring_type: The class that first declares the member in the MRO.
        name: Member name.
        value_type: Declared value type, object if the member carries no usable annotation.
    """
    declaring_type: type
    name: str
    value_type: type = object

    def __str__(self) -> str:
        return f"{class_name(self.declaring_type)}.{self.name}"


@dataclass(frozen=True)
class MemberInfo:
    """
    A data member discovered on a class or instance.

    Attributes:
        name: Member name.
        declaring_type: The class that first declares the member in the MRO.
        declared_type: Normalized annotation, or None when the type is only known at runtime.
        kind: Member kind, "attribute" marks plain instance attributes not declared on the class.
    """
    name: str
    declaring_type: type
    declared_type: type | None = None
    kind: Literal["field", "property", "attribute"] = "field"

    @functools.cached_property
    def identifier(self) -> MemberIdentifier:
        return MemberIdentifier(self.declaring_type, self.name, self.declared_type or object)

    @functools.cached_property
    def identifiers(self) -> tuple[MemberIdentifier, ...]:
        """
        Identifiers a configuration may be registered under, most specific first.

        Plain instance attributes have no declaring class, so they match a selector
        resolved on the runtime class or on any of its bases.
        """
        if self.kind != "attribute":
            return (self.identifier,)
        return tuple(MemberIdentifier(klass, self.name) for klass in self.declaring_type.__mro__ if klass is not object)

    def value_type(self, value: Any) -> type:
        """Return the declared type if known, otherwise the runtime type of value."""
        if self.declared_type is not None:
            return self.declared_type
        return type(value)


class _MemberProbe:
    """Stand-in owner passed to member selectors to record the accessed attribute."""

    def __getattr__(self, name: str) -> "_MemberAccess":
        return _MemberAccess(self, name)


class _MemberAccess:
    __slots__ = ("probe", "name")

    def __init__(self, probe: _MemberProbe, name: str) -> None:
        self.probe = probe
        self.name = name


# Methods --------------------------------------------------------------------------------------------------------------

@functools.cache
def class_members(cls: type) -> tuple[MemberInfo, ...]:
    """
    Enumerate members declared on a class, fields first, then properties.

    Fields are collected from base to derived class; within a class, annotated fields
    come in declaration order, followed by unannotated __slots__ entries. ClassVar
    annotations and private (underscore-prefixed) names are skipped. Properties,
    including functools.cached_property, follow in the same base to derived order.

    Args:
        cls: The class to inspect.

    Returns:
        Tuple of MemberInfo, cached per class.

    Examples:
        >>> @dataclass
        ... class Point:
        ...     x: int
        ...     y: int | None = None
        >>> [m.name for m in class_members(Point)]
        ['x', 'y']
    """
    if not isinstance(cls, type):
        raise TypeError(f"cls must be a type, but got {fmt_type(cls)}")

    hints = _type_hints(cls)
    fields: dict[str, MemberInfo] = {}
    properties: dict[str, MemberInfo] = {}

    for klass in reversed(cls.__mro__):
        if klass is object:
            continue

        for name in inspect.get_annotations(klass):
            if _is_private(name) or name in fields:
                continue
            hint = hints.get(name)
            if _is_classvar(hint):
                continue
            fields[name] = MemberInfo(name, klass, _normalize_type(hint), "field")

        for name in _own_slots(klass):
            if _is_private(name) or name in fields:
                continue
            fields[name] = MemberInfo(name, klass, _normalize_type(hints.get(name)), "field")

        for name, attr in vars(klass).items():
            if _is_private(name) or name in properties:
                continue
            if isinstance(attr, (property, functools.cached_property)):
                properties[name] = MemberInfo(name, klass, _return_type(attr), "property")

    for name in properties:
        fields.pop(name, None)

    return (*fields.values(), *properties.values())


def iter_members(obj: Any) -> Iterator[tuple[MemberInfo, Any]]:
    """
    Yield (member, value) pairs of an object in a stable order.

    Order: class fields, then public instance attributes not declared on the class
    (in insertion order), then properties. Declared fields that are not set on the
    instance are skipped. Exceptions raised by property getters propagate.
    """
    cls = type(obj)
    declared = class_members(cls)
    known = {m.name for m in declared}

    for member in declared:
        if member.kind != "field":
            continue
        value = getattr(obj, member.name, _MISSING)
        if value is not _MISSING:
            yield member, value

    instance_dict = getattr(obj, "__dict__", None)
    if isinstance(instance_dict, dict):
        for name, value in list(instance_dict.items()):
            if name in known or _is_private(name):
                continue
            yield MemberInfo(name, cls, None, "attribute"), value

    for member in declared:
        if member.kind == "property":
            yield member, getattr(obj, member.name)


def resolve_member(owner: type, selector: Callable[[Any], Any]) -> MemberIdentifier:
    """
    Resolve a member selector like `lambda p: p.name` to a MemberIdentifier.

    The selector is called once with a recording probe, it must return exactly one
    direct attribute access. The accessed name must be a public field or property of owner,
    or a name owner does not define at all, which is taken as a plain instance attribute
    set in __init__ and typed at runtime.

    Args:
        owner: The class the selector applies to.
        selector: One-argument callable returning a member of its argument.

    Returns:
        MemberIdentifier of the selected member.

    Raises:
        MissingSelectorError: If selector is None.
        ConfigurationError: If selector is not a direct member access or does not denote
            a public data member of owner (private name, method, class attribute).
    """
    if selector is None:
        raise MissingSelectorError("Member selector is required, but got None")
    if not callable(selector):
        raise ConfigurationError(f"Member selector must be callable, but got {fmt_type(selector)}")

    probe = _MemberProbe()
    try:
        accessed = selector(probe)
    except Exception as e:
        raise ConfigurationError(
            "Cannot resolve member expression, selector must return a single attribute access") from e

    if not isinstance(accessed, _MemberAccess) or accessed.probe is not probe:
        raise ConfigurationError(
            f"Cannot resolve member expression, selector returned {fmt_value(accessed)} "
            f"instead of an attribute access")

    name = accessed.name
    for member in class_members(owner):
        if member.name == name:
            logger.debug("Resolved member selector to %s", member.identifier)
            return member.identifier

    # Plain instance attribute, only known once an instance is printed
    if (not _is_private(name) and _has_instance_dict(owner)
            and inspect.getattr_static(owner, name, _MISSING) is _MISSING):
        identifier = MemberIdentifier(owner, name)
        logger.debug("Resolved member selector to instance attribute %s", identifier)
        return identifier

    raise ConfigurationError(_not_a_member_message(owner, name))


# Private Methods ------------------------------------------------------------------------------------------------------

def _is_private(name: str) -> bool:
    return name.startswith("_")


def _has_instance_dict(klass: type) -> bool:
    return any("__dict__" in vars(k) for k in klass.__mro__)


def _is_classvar(hint: Any) -> bool:
    if hint is ClassVar or get_origin(hint) is ClassVar:
        return True
    return isinstance(hint, str) and hint.startswith(("ClassVar", "typing.ClassVar"))


def _normalize_type(hint: Any) -> type | None:
    """
    Reduce an annotation to a plain class usable as a lookup key.

    Optional[X] and X | None become X, generics become their origin, Annotated is
    unwrapped. Anything else (Any, object, TypeVar, unions, unresolved strings) is None.
    """
    if hint is None or hint is Any or isinstance(hint, (str, typing.TypeVar)):
        return None

    origin = get_origin(hint)
    if origin is typing.Annotated:
        return _normalize_type(get_args(hint)[0])
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(hint) if a is not type(None)]
        return _normalize_type(args[0]) if len(args) == 1 else None
    if origin is not None:
        hint = origin

    if isinstance(hint, type) and hint is not object:
        return hint
    return None


def _own_slots(klass: type) -> tuple[str, ...]:
    slots = vars(klass).get("__slots__", ())
    if isinstance(slots, str):
        return (slots,)
    return tuple(slots)


def _return_type(attr: property | functools.cached_property) -> type | None:
    fget = attr.fget if isinstance(attr, property) else attr.func
    if fget is None:
        return None
    try:
        hint = typing.get_type_hints(fget).get("return")
    except (NameError, TypeError, AttributeError):
        hint = getattr(fget, "__annotations__", {}).get("return")
    return _normalize_type(hint)


def _type_hints(cls: type) -> dict[str, Any]:
    """Resolved annotations of cls, falling back to raw annotations on unresolved forward references."""
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError, AttributeError) as e:
        logger.debug("Cannot resolve annotations of %s: %s", class_name(cls), e)
        hints = {}
        for klass in reversed(cls.__mro__):
            hints.update(inspect.get_annotations(klass))
        return hints


def _not_a_member_message(owner: type, name: str) -> str:
    owner_name = class_name(owner)
    if _is_private(name):
        return f"Expected a public field or property, but {owner_name}.{name} is private"

    attr = inspect.getattr_static(owner, name, _MISSING)
    if attr is _MISSING:
        return f"{owner_name} has no field or property named '{name}'"
    if callable(attr) or isinstance(attr, (staticmethod, classmethod)):
        return f"Expected field or property, but {owner_name}.{name} is a method"
    return f"Expected field or property, but {owner_name}.{name} is a class attribute"
