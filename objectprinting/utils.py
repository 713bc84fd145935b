"""
Object Printing utilities shared across the package.

Contains naming and message helpers used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns the module-qualified name for non-builtin classes.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class C: ...
        >>> class_name(C())
        'C'
    """
    cls = obj if isinstance(obj, type) else obj.__class__

    if fully_qualified and cls.__module__ != "builtins":
        return f"{cls.__module__}.{cls.__qualname__}"
    return cls.__name__


def fmt_type(obj: Any) -> str:
    """
    Format type information for exception messages.

    Examples:
        >>> fmt_type(42)
        '<int>'
        >>> fmt_type(int)
        '<int>'
    """
    return f"<{class_name(obj)}>"


def fmt_value(obj: Any, max_repr: int = 80) -> str:
    """
    Format a single value as a type-value pair for exception messages.

    Broken __repr__ methods are handled gracefully and long reprs are truncated.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("hello world", max_repr=5)
        "<str: 'hel...>"
    """
    try:
        repr_ = repr(obj)
    except Exception as e:
        repr_ = f"<{type(obj).__name__} object (repr failed: {type(e).__name__})>"

    if len(repr_) > max_repr:
        repr_ = repr_[:max(1, max_repr - 1)] + "..."

    return f"<{class_name(obj)}: {repr_}>"
