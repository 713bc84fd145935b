"""
Fluent printer configuration.

PrintingConfig is bound to an owner type and owns a single SerializationSettings instance.
Every configuration call mutates these settings in place and returns the PrintingConfig,
so calls can be chained:

    >>> printer = (ObjectPrinter.for_type(Person)
    ...            .exclude(uuid.UUID)
    ...            .exclude(lambda p: p.password)
    ...            .use(float).with_locale("de_DE")
    ...            .use(lambda p: p.name).with_trimming(10)
    ...            .use_cycle_reference(True))
    >>> text = printer.print_to_string(person)
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Callable, Generic, TypeVar, get_origin

# Third-party ----------------------------------------------------------------------------------------------------------
from babel import Locale

# Local ----------------------------------------------------------------------------------------------------------------
from .engine import PrintingEngine
from .errors import ConfigurationError
from .locales import is_locale_aware, locale_formatter
from .members import MemberIdentifier, resolve_member
from .settings import SerializationSettings
from .utils import class_name, fmt_type, fmt_value

T = TypeVar("T")
V = TypeVar("V")


# Classes --------------------------------------------------------------------------------------------------------------

class PrintingConfig(Generic[T]):
    """
    Printer bound to an owner type, configured via chained calls.

    Member selectors are one-argument callables returning a member of the owner,
    like `lambda p: p.name`. They are resolved immediately, so invalid selectors
    fail at configuration time with ConfigurationError.
    """

    def __init__(self, owner: type[T]) -> None:
        owner = get_origin(owner) or owner
        if not isinstance(owner, type):
            raise TypeError(f"owner must be a type, but got {fmt_type(owner)}")
        self._owner = owner
        self._settings = SerializationSettings()

    @property
    def owner(self) -> type[T]:
        return self._owner

    @property
    def settings(self) -> SerializationSettings:
        return self._settings

    def exclude(self, target: type | Callable[[T], Any]) -> "PrintingConfig[T]":
        """
        Exclude all members of a type, or a single member selected by a selector.

        Args:
            target: A type, or a member selector like `lambda p: p.name`.

        Returns:
            Self, to allow chaining.

        Raises:
            MissingSelectorError: If target is None.
            ConfigurationError: If target is a selector that does not denote a field or property.
        """
        if isinstance(target, type):
            self._settings.exclude_type(target)
        else:
            self._settings.exclude_member(resolve_member(self._owner, target))
        return self

    def use(self, target: type[V] | Callable[[T], V]) -> "TypeConfig[T, V] | MemberConfig[T, V]":
        """
        Start an override for a type or for a single member.

        Returns:
            TypeConfig if target is a type, MemberConfig if target is a member selector.
        """
        if isinstance(target, type):
            return TypeConfig(self, target)
        return MemberConfig(self, resolve_member(self._owner, target))

    def use_cycle_reference(self, allowed: bool = False) -> "PrintingConfig[T]":
        """Print cyclic references as a sentinel if allowed, otherwise raise CyclicReferenceError."""
        if not isinstance(allowed, bool):
            raise TypeError(f"allowed must be a bool, but got {fmt_type(allowed)}")
        self._settings.cycles_allowed = allowed
        return self

    def with_newline(self, newline: str) -> "PrintingConfig[T]":
        """Override the line terminator, os.linesep by default."""
        if not isinstance(newline, str):
            raise TypeError(f"newline must be a str, but got {fmt_type(newline)}")
        self._settings.newline = newline
        return self

    def print_to_string(self, obj: T | None) -> str:
        """
        Render obj with the current configuration.

        Raises:
            TypeError: If obj is not None and not an instance of the owner type.
            CyclicReferenceError: If obj contains a cyclic reference and cycles are not allowed.
        """
        if obj is not None and not isinstance(obj, self._owner):
            raise TypeError(f"Printer for {fmt_type(self._owner)} cannot print {fmt_type(obj)}")
        return PrintingEngine(self._settings).render(obj)

    def __repr__(self) -> str:
        return f"{class_name(self)}[{class_name(self._owner)}]"


class _OverrideConfig(Generic[T, V]):
    """Common part of type and member overrides."""

    def __init__(self, config: PrintingConfig[T]) -> None:
        self._config = config

    @property
    def value_type(self) -> type:
        raise NotImplementedError

    def with_serializer(self, serializer: Callable[[V], str]) -> PrintingConfig[T]:
        """
        Print values with a custom serializer, replacing any previous one for this target.

        Raises:
            TypeError: If serializer is not callable.
        """
        self._register(serializer)
        return self._config

    def with_locale(self, locale: Locale | str) -> PrintingConfig[T]:
        """
        Print values with their locale-aware conversion, e.g. "en_GB" or a babel.Locale.

        Raises:
            ConfigurationError: If the locale is unknown or the target type is not locale-aware.
        """
        value_type = self.value_type
        if value_type is not object and not is_locale_aware(value_type):
            raise ConfigurationError(f"Locale formatting is not supported for {fmt_type(value_type)}")
        self._register(locale_formatter(locale))
        return self._config

    def _register(self, serializer: Callable[[Any], str]) -> None:
        raise NotImplementedError


class TypeConfig(_OverrideConfig[T, V]):
    """Override for every member declared with a given type."""

    def __init__(self, config: PrintingConfig[T], tp: type[V]) -> None:
        super().__init__(config)
        self._type = tp

    @property
    def value_type(self) -> type:
        return self._type

    def _register(self, serializer: Callable[[Any], str]) -> None:
        self._config.settings.set_type_serializer(self._type, serializer)


class MemberConfig(_OverrideConfig[T, V]):
    """Override for a single member, takes precedence over type overrides."""

    def __init__(self, config: PrintingConfig[T], member: MemberIdentifier) -> None:
        super().__init__(config)
        self._member = member

    @property
    def member(self) -> MemberIdentifier:
        return self._member

    @property
    def value_type(self) -> type:
        return self._member.value_type

    def with_trimming(self, length: int) -> PrintingConfig[T]:
        """
        Print only the first `length` characters of the member's string value.

        Raises:
            ConfigurationError: If length is negative or the member is not a str.
        """
        if isinstance(length, bool) or not isinstance(length, int):
            raise TypeError(f"length must be an int, but got {fmt_type(length)}")
        if length < 0:
            raise ConfigurationError(f"Trimming length must be >= 0, but got {fmt_value(length)}")
        if self.value_type not in (str, object):
            raise ConfigurationError(f"Trimming requires a str member, but {self._member} is {fmt_type(self.value_type)}")

        def _trim(value: Any) -> str:
            if value is None:
                return SerializationSettings.NULL
            return str(value)[:length]

        self._register(_trim)
        return self._config

    def _register(self, serializer: Callable[[Any], str]) -> None:
        self._config.settings.set_member_serializer(self._member, serializer)
