"""
Object Printer entry points.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Callable, TypeVar

# Local ----------------------------------------------------------------------------------------------------------------
from .configs import PrintingConfig
from .utils import fmt_type

T = TypeVar("T")


# Classes --------------------------------------------------------------------------------------------------------------

class ObjectPrinter:
    """
    Factory of configurable printers.

    Examples:
        >>> ObjectPrinter.for_type(list).print_to_string(["Moscow", "Rio"])
        '[\\n\\tMoscow\\n\\tRio\\n]\\n'
    """

    @staticmethod
    def for_type(owner: type[T]) -> PrintingConfig[T]:
        """Create a printer with default settings bound to the owner type."""
        return PrintingConfig(owner)


# Methods --------------------------------------------------------------------------------------------------------------

def print_to_string(obj: Any,
                    configure: Callable[[PrintingConfig], PrintingConfig] | None = None,
                    ) -> str:
    """
    Print an object in one call.

    Args:
        obj: Object to print.
        configure: Optional callable receiving a fresh PrintingConfig bound to type(obj)
            and returning the configured PrintingConfig.

    Returns:
        Rendered text.

    Examples:
        >>> print_to_string(person, lambda c: c.exclude(uuid.UUID).use(lambda p: p.name).with_trimming(3))
    """
    config = PrintingConfig(type(obj))
    if configure is not None:
        config = configure(config)
        if not isinstance(config, PrintingConfig):
            raise TypeError(f"configure must return a PrintingConfig, but returned {fmt_type(config)}")
    return config.print_to_string(obj)
