"""
TopShot Transaction Generator - Cadence Value Serializer

This module renders typed Python values as Cadence literals that can be
embedded into transaction templates. It is the only place where caller
supplied values are turned into program text: integer width markers,
sequence literals, string escaping and dictionary literals are all
produced here.
"""

import unicodedata
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Union

from cadence.exceptions import (
    EmptySequenceError,
    InvalidAddressError,
    SerializationError,
    ValueOutOfRangeError,
)


ADDRESS_LENGTH = 8
SUPPORTED_WIDTHS = (32, 64)

# Escapes understood by the Cadence string literal grammar
_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}

# Line/paragraph separators are not control characters but still break lines
_FORCED_UNICODE_ESCAPES = {"\u2028", "\u2029"}


@dataclass(frozen=True)
class Address:
    """Flow account or contract deployment address (8 bytes)."""
    value: bytes

    def __post_init__(self):
        if not isinstance(self.value, bytes):
            raise InvalidAddressError(f"Address value must be bytes, got {type(self.value).__name__}")
        if len(self.value) != ADDRESS_LENGTH:
            raise InvalidAddressError(
                f"Address must be {ADDRESS_LENGTH} bytes, got {len(self.value)}"
            )

    @classmethod
    def from_bytes(cls, data: bytes) -> "Address":
        """Create address from up to 8 bytes, left padding with zeros."""
        if len(data) > ADDRESS_LENGTH:
            raise InvalidAddressError(f"Address too long: {len(data)} bytes")
        return cls(bytes(ADDRESS_LENGTH - len(data)) + bytes(data))

    @classmethod
    def from_hex(cls, text: str) -> "Address":
        """Create address from a hex string, with or without 0x prefix."""
        hex_part = text.strip()
        if hex_part[:2].lower() == "0x":
            hex_part = hex_part[2:]
        if not hex_part or len(hex_part) > ADDRESS_LENGTH * 2:
            raise InvalidAddressError(f"Invalid address: {text!r}")
        if any(c not in "0123456789abcdefABCDEF" for c in hex_part):
            raise InvalidAddressError(f"Invalid address: {text!r}")
        if len(hex_part) % 2:
            hex_part = "0" + hex_part
        return cls.from_bytes(bytes.fromhex(hex_part))

    @classmethod
    def coerce(cls, value: Union["Address", str, bytes]) -> "Address":
        """Accept an Address, a hex string or raw bytes."""
        if isinstance(value, Address):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        if isinstance(value, (bytes, bytearray)):
            return cls.from_bytes(bytes(value))
        raise InvalidAddressError(f"Cannot interpret {type(value).__name__} as an address")

    def hex(self) -> str:
        return self.value.hex()

    def __str__(self) -> str:
        return "0x" + self.hex()


def render_address(address: Address) -> str:
    """Render address as bare hex; templates supply the 0x prefix."""
    return address.hex()


def _check_width(width: int):
    if width not in SUPPORTED_WIDTHS:
        raise ValueError(f"Unsupported integer width: {width}")


def _check_uint(width: int, value, field: Optional[str]) -> int:
    # bool is an int subclass but never a valid identifier
    if isinstance(value, bool) or not isinstance(value, int):
        raise SerializationError(
            f"Expected integer for UInt{width}, got {type(value).__name__}", field
        )
    if value < 0 or value >= (1 << width):
        raise ValueOutOfRangeError(width, value, field)
    return value


def render_uint(width: int, value: int, field: Optional[str] = None) -> str:
    """
    Render a width-annotated unsigned integer literal.

    Args:
        width: Integer width in bits (32 or 64)
        value: Value to render
        field: Name reported in errors

    Returns:
        Literal such as ``UInt32(5)``

    Raises:
        ValueOutOfRangeError: If value does not fit the width
        SerializationError: If value is not an integer
    """
    _check_width(width)
    return f"UInt{width}({_check_uint(width, value, field)})"


def render_uint_sequence(
    width: int,
    values: Iterable[int],
    non_empty: bool = True,
    field: Optional[str] = None
) -> str:
    """
    Render a bracketed array of width-annotated integers in input order.

    All elements are validated before any text is produced.
    """
    _check_width(width)
    items = list(values)
    if not items and non_empty:
        raise EmptySequenceError(field)

    literals = []
    for index, value in enumerate(items):
        element = f"{field}[{index}]" if field else f"[{index}]"
        literals.append(f"UInt{width}({_check_uint(width, value, element)})")

    return "[" + ", ".join(literals) + "]"


def _escape_char(char: str, field: Optional[str] = None) -> str:
    if char in _STRING_ESCAPES:
        return _STRING_ESCAPES[char]
    if char in _FORCED_UNICODE_ESCAPES or unicodedata.category(char) == "Cc":
        return "\\u{%x}" % ord(char)
    if unicodedata.category(char) == "Cs":
        # Cadence strings hold Unicode scalars only
        raise SerializationError(f"Lone surrogate U+{ord(char):04X} in string", field)
    return char


def render_string_literal(text: str, field: Optional[str] = None) -> str:
    """Render a double-quoted Cadence string literal with escaping."""
    if not isinstance(text, str):
        raise SerializationError(f"Expected string, got {type(text).__name__}", field)
    return '"' + "".join(_escape_char(c, field) for c in text) + '"'


def render_structured_record(
    fields: Mapping[str, Union[str, int]],
    field: Optional[str] = None
) -> str:
    """
    Render a metadata record as a ``{String: String}`` dictionary literal.

    Keys are emitted in sorted order. Integer values are rendered as their
    decimal string, matching how play metadata stores numbers, so ``2019``
    and ``"2019"`` produce the same literal and decode back as strings.
    """
    if not isinstance(fields, Mapping):
        raise SerializationError(f"Expected mapping, got {type(fields).__name__}", field)

    entries: Dict[str, str] = {}
    for key, value in fields.items():
        name = f"{field}.{key}" if field else str(key)
        if not isinstance(key, str):
            raise SerializationError(f"Record key must be a string, got {type(key).__name__}", name)
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise SerializationError(
                f"Unsupported record value type {type(value).__name__}", name
            )
        entries[key] = value if isinstance(value, str) else str(value)

    rendered = [
        f"{render_string_literal(key, field)}: {render_string_literal(entries[key], field)}"
        for key in sorted(entries)
    ]
    return "{" + ", ".join(rendered) + "}"
