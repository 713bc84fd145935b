"""
Locale-aware value formatting backed by Babel.

A locale is an opaque formatting parameter: a Babel Locale or a locale identifier
like "en_GB" or "de-DE". Numbers and dates/times are locale-aware, other values are not.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import datetime as dt
from decimal import Decimal
from typing import Any, Callable

# Third-party ----------------------------------------------------------------------------------------------------------
from babel import Locale, UnknownLocaleError
from babel.dates import format_date, format_datetime, format_time
from babel.numbers import format_decimal

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import ConfigurationError
from .utils import fmt_type, fmt_value

LOCALE_AWARE_TYPES: tuple[type, ...] = (int, float, Decimal, dt.date, dt.datetime, dt.time)


# Methods --------------------------------------------------------------------------------------------------------------

def is_locale_aware(tp: type) -> bool:
    """
    Check whether values of type tp have a locale-aware string conversion.

    Examples:
        >>> is_locale_aware(float)
        True
        >>> is_locale_aware(bool)
        False
        >>> is_locale_aware(str)
        False
    """
    if not isinstance(tp, type) or issubclass(tp, bool):
        return False
    return issubclass(tp, LOCALE_AWARE_TYPES)


def parse_locale(locale: Locale | str) -> Locale:
    """
    Convert a locale identifier to a Babel Locale.

    Both "en_GB" and "en-GB" forms are accepted.

    Raises:
        ConfigurationError: If the identifier is unknown or malformed.
        TypeError: If locale is neither a str nor a Locale.
    """
    if isinstance(locale, Locale):
        return locale
    if not isinstance(locale, str):
        raise TypeError(f"locale must be a str or babel.Locale, but got {fmt_type(locale)}")

    try:
        return Locale.parse(locale.replace("-", "_"))
    except (UnknownLocaleError, ValueError) as e:
        raise ConfigurationError(f"Unknown locale {fmt_value(locale)}") from e


def format_localized(value: Any, locale: Locale) -> str:
    """
    Format a value with its locale-aware conversion.

    Numbers keep all their significant digits and are not grouped, dates and times use
    the locale's medium format. None is printed as 'null', values without a locale-aware
    conversion fall back to str().
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float, Decimal)):
        return format_decimal(value, locale=locale, decimal_quantization=False, group_separator=False)
    if isinstance(value, dt.datetime):
        return format_datetime(value, locale=locale)
    if isinstance(value, dt.date):
        return format_date(value, locale=locale)
    if isinstance(value, dt.time):
        return format_time(value, locale=locale)
    return str(value)


def locale_formatter(locale: Locale | str) -> Callable[[Any], str]:
    """
    Create a serializer bound to a locale.

    Examples:
        >>> fmt = locale_formatter("de_DE")
        >>> fmt(1.85)
        '1,85'
    """
    locale_ = parse_locale(locale)

    def _format(value: Any) -> str:
        return format_localized(value, locale_)

    return _format
