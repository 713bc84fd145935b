"""
Object Printing - configurable, recursive object-to-text rendering for debugging and tests.
"""

from .configs import MemberConfig, PrintingConfig, TypeConfig
from .engine import KeyValuePair, PrintingEngine, RenderContext
from .errors import ConfigurationError, CyclicReferenceError, MissingSelectorError, ObjectPrintingError
from .final_types import FINAL_TYPES, is_final_type
from .members import MemberIdentifier, MemberInfo, class_members, iter_members, resolve_member
from .printer import ObjectPrinter, print_to_string
from .settings import SerializationSettings

__all__ = [
    'ConfigurationError',
    'CyclicReferenceError',
    'FINAL_TYPES',
    'KeyValuePair',
    'MemberConfig',
    'MemberIdentifier',
    'MemberInfo',
    'MissingSelectorError',
    'ObjectPrinter',
    'ObjectPrintingError',
    'PrintingConfig',
    'PrintingEngine',
    'RenderContext',
    'SerializationSettings',
    'TypeConfig',
    'class_members',
    'is_final_type',
    'iter_members',
    'print_to_string',
    'resolve_member',
]
