"""
Printing engine: recursive rendering of arbitrary objects to indented text.

Output format, one tab per nesting level:

    Person
    	Name = Alex
    	Age = 19
    	Cities = 
    	[
    		Moscow
    		Rio
    	]

Mapping entries are rendered as KeyValuePair objects with Key and Value members.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import logging
from dataclasses import dataclass, field, replace
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import CyclicReferenceError
from .final_types import is_final_type
from .members import iter_members
from .settings import SerializationSettings
from .utils import class_name, fmt_type

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class KeyValuePair:
    """A mapping entry, printed like any other object."""
    Key: Any
    Value: Any


@dataclass
class RenderContext:
    """
    State of a single render invocation.

    Attributes:
        level: Current nesting level.
        visited: Identities of the objects on the current render path.
            Shared by all nested contexts of one invocation.
    """
    level: int = 0
    visited: set[int] = field(default_factory=set)

    def nested(self) -> "RenderContext":
        return replace(self, level=self.level + 1)


class PrintingEngine:
    """
    Renders objects according to SerializationSettings.

    The engine holds no per-render state and may be reused for sequential renders,
    every render() call starts with a fresh RenderContext.
    """

    def __init__(self, settings: SerializationSettings | None = None) -> None:
        if not isinstance(settings, (SerializationSettings, type(None))):
            raise TypeError(f"settings must be a SerializationSettings instance, but got {fmt_type(settings)}")
        self.settings = settings or SerializationSettings()

    def render(self, obj: Any) -> str:
        """
        Render an object graph to a string ending with a single line terminator.

        Raises:
            CyclicReferenceError: If an object references an ancestor and cycles are not allowed.
        """
        logger.debug("Rendering %s", fmt_type(obj))
        return self._render(obj, RenderContext())

    def _render(self, obj: Any, ctx: RenderContext) -> str:
        newline = self.settings.newline

        if obj is None:
            return SerializationSettings.NULL + newline
        if is_final_type(type(obj)):
            return f"{obj}{newline}"

        if id(obj) in ctx.visited:
            return self._render_cyclic_reference(obj)

        ctx.visited.add(id(obj))
        try:
            if isinstance(obj, abc.Collection):
                return self._render_collection(obj, ctx)
            return self._render_object(obj, ctx)
        finally:
            ctx.visited.discard(id(obj))

    def _render_collection(self, collection: abc.Collection, ctx: RenderContext) -> str:
        newline = self.settings.newline
        if len(collection) == 0:
            return "[]" + newline

        if isinstance(collection, abc.Mapping):
            items = (KeyValuePair(k, v) for k, v in collection.items())
        else:
            items = iter(collection)

        indent = "\t" * ctx.level
        nested = ctx.nested()

        # Nested collection starts after "<Name> = " on the caller's line
        parts = [newline] if ctx.level != 0 else []
        parts.append(f"{indent}[{newline}")
        for item in items:
            parts.append(f"{indent}\t{self._render(item, nested)}")
        parts.append(f"{indent}]{newline}")
        return "".join(parts)

    def _render_object(self, obj: Any, ctx: RenderContext) -> str:
        """
        Render an object header and its members.

        A member referencing an ancestor triggers the cycle policy before any serializer runs.
        """
        newline = self.settings.newline
        indent = "\t" * (ctx.level + 1)
        nested = ctx.nested()

        parts = [class_name(obj) + newline]
        for member, value in iter_members(obj):
            value_type = member.value_type(value)
            if self.settings.is_excluded(member, value_type):
                continue

            serializer = self.settings.resolve(member, value_type)
            if id(value) in ctx.visited:
                rendered = self._render_cyclic_reference(value)
            elif serializer is not None:
                rendered = f"{serializer(value)}{newline}"
            else:
                rendered = self._render(value, nested)
            parts.append(f"{indent}{member.name} = {rendered}")

        return "".join(parts)

    def _render_cyclic_reference(self, obj: Any) -> str:
        if not self.settings.cycles_allowed:
            raise CyclicReferenceError(f"Unexpected cyclic reference to {fmt_type(obj)} instance", obj)
        logger.debug("Cyclic reference to %s printed as sentinel", fmt_type(obj))
        return SerializationSettings.CYCLIC_REFERENCE + self.settings.newline
