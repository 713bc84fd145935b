"""
Serialization settings: exclusions, overrides and cyclic reference policy of a printer.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar

# Local ----------------------------------------------------------------------------------------------------------------
from .members import MemberIdentifier, MemberInfo
from .utils import class_name, fmt_type

logger = logging.getLogger(__name__)

Serializer = Callable[[Any], str]


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass
class SerializationSettings:
    """
    Active configuration of a printer.

    Mutated in place while a printer is being configured, read-only during a render.

    Attributes:
        excluded_types: Members declared with these types are not printed.
        excluded_members: Members with these identifiers are not printed.
        type_serializers: Serializer per declared member type, the last registration wins.
        member_serializers: Serializer per member, the last registration wins.
            Takes precedence over type_serializers.
        cycles_allowed: If True, cyclic references are printed as CYCLIC_REFERENCE,
            otherwise rendering raises CyclicReferenceError.
        newline: Line terminator.
    """
    CYCLIC_REFERENCE: ClassVar[str] = "![Cyclic reference]!"
    NULL: ClassVar[str] = "null"

    excluded_types: set[type] = field(default_factory=set)
    excluded_members: set[MemberIdentifier] = field(default_factory=set)
    type_serializers: dict[type, Serializer] = field(default_factory=dict)
    member_serializers: dict[MemberIdentifier, Serializer] = field(default_factory=dict)
    cycles_allowed: bool = False
    newline: str = os.linesep

    def exclude_type(self, tp: type) -> None:
        if not isinstance(tp, type):
            raise TypeError(f"Excluded type must be a type, but got {fmt_type(tp)}")
        self.excluded_types.add(tp)
        logger.debug("Excluded type %s", class_name(tp))

    def exclude_member(self, member: MemberIdentifier) -> None:
        self.excluded_members.add(member)
        logger.debug("Excluded member %s", member)

    def set_type_serializer(self, tp: type, serializer: Serializer) -> None:
        self.type_serializers[tp] = _checked_serializer(serializer)
        logger.debug("Registered serializer for type %s", class_name(tp))

    def set_member_serializer(self, member: MemberIdentifier, serializer: Serializer) -> None:
        self.member_serializers[member] = _checked_serializer(serializer)
        logger.debug("Registered serializer for member %s", member)

    def is_excluded(self, member: MemberInfo, value_type: type) -> bool:
        """Check whether a member is excluded by its identifier or by its value type."""
        if value_type in self.excluded_types:
            return True
        return any(identifier in self.excluded_members for identifier in member.identifiers)

    def resolve(self, member: MemberInfo | MemberIdentifier, value_type: type) -> Serializer | None:
        """
        Find the serializer applicable to a member value.

        Member serializers take precedence over type serializers regardless of
        registration order. A plain instance attribute matches a serializer registered
        on its runtime class or any base, the most derived registration wins.
        Returns None if the value should be rendered by default.
        """
        identifiers = member.identifiers if isinstance(member, MemberInfo) else (member,)
        for identifier in identifiers:
            serializer = self.member_serializers.get(identifier)
            if serializer is not None:
                return serializer
        return self.type_serializers.get(value_type)


# Private Methods ------------------------------------------------------------------------------------------------------

def _checked_serializer(serializer: Any) -> Serializer:
    if not callable(serializer):
        raise TypeError(f"Serializer must be callable, but got {fmt_type(serializer)}")
    return serializer
