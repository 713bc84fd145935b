"""
Object Printing exceptions.

Configuration errors are raised synchronously while a printer is being configured,
render errors are raised from print_to_string() and abort the whole render.
"""


# Classes --------------------------------------------------------------------------------------------------------------

class ObjectPrintingError(Exception):
    """Base class for all objectprinting errors."""


class ConfigurationError(ObjectPrintingError, ValueError):
    """
    Invalid printer configuration.

    Raised when a member selector does not resolve to exactly one field or property access,
    or when an override cannot apply to its target.
    """


class MissingSelectorError(ConfigurationError, TypeError):
    """Member selector is absent (None)."""


class CyclicReferenceError(ObjectPrintingError):
    """
    An object references one of its ancestors on the current render path.

    Raised only when cyclic references are not allowed, see PrintingConfig.use_cycle_reference().
    """

    def __init__(self, message: str, obj: object = None) -> None:
        super().__init__(message)
        self.obj = obj
