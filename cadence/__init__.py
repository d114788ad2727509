"""
TopShot Transaction Generator - Cadence Literals

Rendering of Python values as Cadence literals.
"""

from .exceptions import (
    ComposeError,
    UnsupportedOperationError,
    SerializationError,
    EmptySequenceError,
    ValueOutOfRangeError,
    InvalidAddressError,
)
from .values import (
    Address,
    render_address,
    render_uint,
    render_uint_sequence,
    render_string_literal,
    render_structured_record,
)

__all__ = [
    'ComposeError',
    'UnsupportedOperationError',
    'SerializationError',
    'EmptySequenceError',
    'ValueOutOfRangeError',
    'InvalidAddressError',
    'Address',
    'render_address',
    'render_uint',
    'render_uint_sequence',
    'render_string_literal',
    'render_structured_record',
]
