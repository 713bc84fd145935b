"""
Final types: values printed with their natural string conversion and never recursed into.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import datetime as dt
import uuid
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any

FINAL_TYPES: frozenset[type] = frozenset({
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    Decimal,
    Fraction,
    dt.date,
    dt.datetime,
    dt.time,
    dt.timedelta,
    dt.timezone,
    uuid.UUID,
})


# Methods --------------------------------------------------------------------------------------------------------------

def is_final_type(tp: Any) -> bool:
    """
    Check whether values of type tp are printed via str() without recursion.

    Subclasses of final types are final too, so a str or Decimal subclass keeps its
    natural string form. Enum members and classes (instances of type or a metaclass)
    are always final.

    Examples:
        >>> is_final_type(int)
        True
        >>> is_final_type(list)
        False
    """
    if tp in FINAL_TYPES:
        return True
    return isinstance(tp, type) and issubclass(tp, (Enum, type, *FINAL_TYPES))
