#
# Object Printing - Members Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import functools
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from objectprinting.errors import ConfigurationError, MissingSelectorError
from objectprinting.members import MemberIdentifier, MemberInfo, class_members, iter_members, resolve_member


# Local Classes & Methods ----------------------------------------------------------------------------------------------

@dataclass
class Base:
    name: str
    tags: list[str] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.name.title()


@dataclass
class Derived(Base):
    LIMIT: ClassVar[int] = 10

    parent: Optional["Derived"] = None
    extra: Any = None
    either: int | str = 0
    _secret: str = "hidden"

    @functools.cached_property
    def size(self) -> int:
        return len(self.tags)

    def method(self) -> None:
        pass


class Slotted:
    __slots__ = ("x", "y")

    def __init__(self) -> None:
        self.x = 1


class Plain:
    count: int

    def __init__(self) -> None:
        self.b = 2
        self.a = 1
        self._hidden = 3


class WithConst:
    LIMIT = 5
    value: int = 0


# Tests ----------------------------------------------------------------------------------------------------------------

class TestClassMembers:

    def test_fields_before_properties(self):
        """Enumerate base fields, derived fields, then properties."""
        names = [m.name for m in class_members(Derived)]
        assert names == ["name", "tags", "parent", "extra", "either", "title", "size"]

    def test_kinds(self):
        kinds = {m.name: m.kind for m in class_members(Derived)}
        assert kinds["name"] == "field"
        assert kinds["title"] == "property"
        assert kinds["size"] == "property"

    def test_skips_classvar_and_private(self):
        names = {m.name for m in class_members(Derived)}
        assert "LIMIT" not in names
        assert "_secret" not in names
        assert "method" not in names

    @pytest.mark.parametrize(
        "name, expected",
        [
            pytest.param("name", str, id="plain"),
            pytest.param("tags", list, id="generic-origin"),
            pytest.param("parent", Derived, id="optional-forward-ref"),
            pytest.param("extra", None, id="any"),
            pytest.param("either", None, id="union"),
            pytest.param("title", str, id="property-return"),
            pytest.param("size", int, id="cached-property-return"),
        ],
    )
    def test_declared_types(self, name, expected):
        members = {m.name: m for m in class_members(Derived)}
        assert members[name].declared_type is expected

    def test_inherited_member_declaring_type(self):
        """Keep the base class as declaring type of inherited members."""
        members = {m.name: m for m in class_members(Derived)}
        assert members["name"].declaring_type is Base
        assert members["parent"].declaring_type is Derived
        assert members["name"].identifier == MemberIdentifier(Base, "name", str)

    def test_unknown_type_identifier(self):
        members = {m.name: m for m in class_members(Derived)}
        assert members["extra"].identifier.value_type is object

    def test_slots(self):
        assert [m.name for m in class_members(Slotted)] == ["x", "y"]

    def test_cached(self):
        assert class_members(Base) is class_members(Base)

    def test_not_a_type(self):
        with pytest.raises(TypeError, match="must be a type"):
            class_members("Base")


class TestIterMembers:

    def test_dataclass(self):
        obj = Derived(name="a", tags=["t"])
        pairs = [(m.name, v) for m, v in iter_members(obj)]
        assert pairs == [
            ("name", "a"),
            ("tags", ["t"]),
            ("parent", None),
            ("extra", None),
            ("either", 0),
            ("title", "A"),
            ("size", 1),
        ]

    def test_unset_slot_skipped(self):
        assert [(m.name, v) for m, v in iter_members(Slotted())] == [("x", 1)]

    def test_instance_attributes(self):
        """Add public instance attributes in insertion order, skip unset annotated fields."""
        pairs = [(m.name, v) for m, v in iter_members(Plain())]
        assert pairs == [("b", 2), ("a", 1)]

    def test_instance_attribute_type_is_runtime(self):
        member, value = next(iter_members(Plain()))
        assert member.declared_type is None
        assert member.value_type(value) is int
        assert member.identifier == MemberIdentifier(Plain, "b", object)

    def test_instance_attribute_identifiers(self):
        """Match instance attributes on the runtime class first, then on its bases."""

        class Child(Plain):
            pass

        member, _ = next(iter_members(Child()))
        assert member.kind == "attribute"
        assert member.identifiers == (MemberIdentifier(Child, "b"), MemberIdentifier(Plain, "b"))

    def test_property_error_propagates(self):

        class Faulty:
            @property
            def broken(self) -> int:
                raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            list(iter_members(Faulty()))


class TestMemberInfo:

    def test_value_type_declared(self):
        member = MemberInfo("name", Base, str)
        assert member.value_type(None) is str

    def test_declared_member_has_single_identifier(self):
        member = MemberInfo("name", Base, str)
        assert member.identifiers == (MemberIdentifier(Base, "name", str),)

    def test_value_type_runtime(self):
        member = MemberInfo("extra", Derived)
        assert member.value_type(1.5) is float

    def test_identifier_str(self):
        assert str(MemberIdentifier(Base, "name", str)) == "Base.name"


class TestResolveMember:

    @pytest.mark.parametrize(
        "selector, expected",
        [
            pytest.param(lambda d: d.name, MemberIdentifier(Base, "name", str), id="inherited-field"),
            pytest.param(lambda d: d.parent, MemberIdentifier(Derived, "parent", Derived), id="own-field"),
            pytest.param(lambda d: d.title, MemberIdentifier(Base, "title", str), id="property"),
            pytest.param(lambda d: d.extra, MemberIdentifier(Derived, "extra", object), id="untyped"),
        ],
    )
    def test_resolves(self, selector, expected):
        assert resolve_member(Derived, selector) == expected

    def test_instance_attribute(self):
        """Resolve names the class does not define to plain instance attributes of the owner."""
        assert resolve_member(Plain, lambda p: p.a) == MemberIdentifier(Plain, "a", object)
        assert resolve_member(Derived, lambda d: d.missing) == MemberIdentifier(Derived, "missing", object)

    def test_same_identifier_from_base_and_derived(self):
        assert resolve_member(Base, lambda b: b.name) == resolve_member(Derived, lambda d: d.name)

    def test_none_selector(self):
        """Fail immediately and distinctly on absent selector."""
        with pytest.raises(MissingSelectorError, match="required"):
            resolve_member(Derived, None)

    def test_none_selector_is_configuration_and_type_error(self):
        with pytest.raises(ConfigurationError):
            resolve_member(Derived, None)
        with pytest.raises(TypeError):
            resolve_member(Derived, None)

    @pytest.mark.parametrize(
        "selector",
        [
            pytest.param(lambda d: "f", id="literal"),
            pytest.param(lambda d: d, id="identity"),
            pytest.param(lambda d: d.parent.name, id="nested"),
            pytest.param(lambda d: d.name + "x", id="expression"),
            pytest.param(lambda d: (d.name, d.tags), id="tuple"),
            pytest.param(lambda: None, id="no-argument"),
        ],
    )
    def test_not_a_member_access(self, selector):
        with pytest.raises(ConfigurationError, match="Cannot resolve member expression"):
            resolve_member(Derived, selector)

    def test_not_a_member_access_is_not_missing_selector(self):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_member(Derived, lambda d: "f")
        assert not isinstance(exc_info.value, MissingSelectorError)

    def test_not_callable(self):
        with pytest.raises(ConfigurationError, match="must be callable"):
            resolve_member(Derived, "name")

    @pytest.mark.parametrize(
        "owner, selector, match",
        [
            pytest.param(Derived, lambda d: d.method, "is a method", id="method"),
            pytest.param(Derived, lambda d: d._secret, "is private", id="private"),
            pytest.param(Slotted, lambda s: s.missing, "no field or property named 'missing'", id="unknown-on-slots"),
            pytest.param(int, lambda i: i.missing, "no field or property named 'missing'", id="unknown-on-builtin"),
            pytest.param(WithConst, lambda c: c.LIMIT, "is a class attribute", id="class-attribute"),
        ],
    )
    def test_not_a_field_or_property(self, owner, selector, match):
        with pytest.raises(ConfigurationError, match=match):
            resolve_member(owner, selector)
