"""
Tests for Cadence literal rendering
"""

import pytest

from cadence.exceptions import (
    ComposeError,
    EmptySequenceError,
    InvalidAddressError,
    SerializationError,
    ValueOutOfRangeError,
)
from cadence.values import (
    Address,
    render_address,
    render_string_literal,
    render_structured_record,
    render_uint,
    render_uint_sequence,
)


class TestAddress:
    """Test Flow address handling."""

    def test_from_hex_with_prefix(self):
        """Test parsing a 0x-prefixed address."""
        address = Address.from_hex("0x0b2a3299cc857e29")
        assert address.value == bytes.fromhex("0b2a3299cc857e29")

    def test_from_hex_without_prefix(self):
        """Test parsing a bare hex address."""
        assert Address.from_hex("0b2a3299cc857e29") == Address.from_hex("0x0b2a3299cc857e29")

    def test_short_address_is_left_padded(self):
        """Test that short addresses are padded to 8 bytes."""
        assert Address.from_hex("0x1").hex() == "0000000000000001"
        assert Address.from_bytes(b"\x01\x02").hex() == "0000000000000102"

    def test_uppercase_hex_is_canonicalized(self):
        """Test that canonical form is lowercase."""
        assert render_address(Address.from_hex("0xABCD000000000001")) == "abcd000000000001"

    @pytest.mark.parametrize("text", ["", "0x", "0xzz", "0x" + "1" * 17, "12 34"])
    def test_invalid_hex(self, text):
        """Test rejection of malformed addresses."""
        with pytest.raises(InvalidAddressError):
            Address.from_hex(text)

    def test_wrong_length_bytes(self):
        """Test that direct construction requires exactly 8 bytes."""
        with pytest.raises(InvalidAddressError):
            Address(b"\x01" * 7)
        with pytest.raises(InvalidAddressError):
            Address.from_bytes(b"\x01" * 9)

    def test_invalid_address_is_value_error(self):
        """Test that address errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            Address.from_hex("not-an-address")

    def test_coerce(self):
        """Test coercion from supported input types."""
        address = Address.from_hex("01")
        assert Address.coerce(address) is address
        assert Address.coerce("0x01") == address
        assert Address.coerce(b"\x01") == address
        with pytest.raises(InvalidAddressError):
            Address.coerce(1)

    def test_render_has_no_prefix(self):
        """Test that rendered addresses leave the prefix to the template."""
        address = Address.from_hex("0x1234567890abcdef")
        assert render_address(address) == "1234567890abcdef"
        assert str(address) == "0x1234567890abcdef"


class TestRenderUint:
    """Test width-annotated integer literals."""

    def test_uint32(self):
        """Test a UInt32 literal."""
        assert render_uint(32, 5) == "UInt32(5)"

    def test_uint64(self):
        """Test a UInt64 literal."""
        assert render_uint(64, 12) == "UInt64(12)"

    @pytest.mark.parametrize("width,value", [
        (32, 0),
        (32, 2**32 - 1),
        (64, 0),
        (64, 2**64 - 1),
    ])
    def test_range_limits(self, width, value, decode_literal):
        """Test values at the edges of each width."""
        literal = render_uint(width, value)
        assert literal == f"UInt{width}({value})"
        assert decode_literal(literal) == value

    @pytest.mark.parametrize("width,value", [
        (32, 2**32),
        (32, -1),
        (64, 2**64),
        (64, -1),
    ])
    def test_out_of_range(self, width, value):
        """Test that out-of-range values are rejected before rendering."""
        with pytest.raises(ValueOutOfRangeError) as exc_info:
            render_uint(width, value, field="set_id")

        assert exc_info.value.width == width
        assert exc_info.value.value == value
        assert exc_info.value.field == "set_id"
        assert "set_id" in str(exc_info.value)

    @pytest.mark.parametrize("value", [True, 1.0, "1", None])
    def test_non_integer(self, value):
        """Test that non-integers are rejected."""
        with pytest.raises(SerializationError):
            render_uint(32, value)

    def test_unsupported_width(self):
        """Test that only 32 and 64 bit widths are supported."""
        with pytest.raises(ValueError):
            render_uint(16, 1)

    def test_errors_share_base(self):
        """Test that serializer errors are compose errors."""
        with pytest.raises(ComposeError):
            render_uint(32, -1)


class TestRenderUintSequence:
    """Test integer array literals."""

    def test_order_preserved(self, decode_literal):
        """Test that element order is preserved."""
        literal = render_uint_sequence(64, [7, 9, 3])
        assert literal == "[UInt64(7), UInt64(9), UInt64(3)]"
        assert decode_literal(literal) == [7, 9, 3]

    def test_single_element(self):
        """Test that a single element has no separator."""
        assert render_uint_sequence(32, [42]) == "[UInt32(42)]"

    def test_empty_required(self):
        """Test that an empty required sequence is an error."""
        with pytest.raises(EmptySequenceError) as exc_info:
            render_uint_sequence(32, [], non_empty=True, field="item_ids")
        assert exc_info.value.field == "item_ids"

    def test_empty_allowed(self):
        """Test that an empty optional sequence renders as an empty array."""
        assert render_uint_sequence(32, [], non_empty=False) == "[]"

    def test_default_requires_elements(self):
        """Test that sequences are non-empty by default."""
        with pytest.raises(EmptySequenceError):
            render_uint_sequence(64, ())

    def test_generator_input(self):
        """Test that any iterable is accepted."""
        assert render_uint_sequence(32, (i for i in range(3))) == "[UInt32(0), UInt32(1), UInt32(2)]"

    def test_element_out_of_range(self):
        """Test that the offending element index is reported."""
        with pytest.raises(ValueOutOfRangeError) as exc_info:
            render_uint_sequence(32, [1, 2**32, 3], field="item_ids")
        assert exc_info.value.field == "item_ids[1]"

    def test_rerender_is_identical(self, decode_literal):
        """Test that decoding and re-rendering reproduces the literal."""
        literal = render_uint_sequence(64, [2**64 - 1, 0, 17])
        assert render_uint_sequence(64, decode_literal(literal)) == literal


class TestRenderStringLiteral:
    """Test string literal escaping."""

    def test_plain(self):
        """Test a string needing no escapes."""
        assert render_string_literal("Series 1") == '"Series 1"'

    def test_quotes_and_backslashes(self):
        """Test escaping of quote and backslash characters."""
        assert render_string_literal('say "hi" \\ bye') == '"say \\"hi\\" \\\\ bye"'

    def test_line_breaks(self):
        """Test that line breaks cannot end the literal's line."""
        literal = render_string_literal("a\nb\rc\td")
        assert literal == '"a\\nb\\rc\\td"'
        assert "\n" not in literal

    def test_control_characters(self):
        """Test unicode escapes for other control characters."""
        assert render_string_literal("\x1b[0m") == '"\\u{1b}[0m"'
        assert render_string_literal("\0") == '"\\0"'
        assert render_string_literal("a\u2028b") == '"a\\u{2028}b"'

    def test_non_ascii_verbatim(self):
        """Test that printable unicode is kept as is."""
        assert render_string_literal("Dončić") == '"Dončić"'

    def test_injection_attempt(self, decode_literal):
        """Test that template break-out text stays inside the literal."""
        hostile = '")\n        destroy admin\n        admin.createSet(name: "'
        literal = render_string_literal(hostile)

        assert literal.count('"') - literal.count('\\"') == 2
        assert "\n" not in literal
        assert decode_literal(literal) == hostile

    @pytest.mark.parametrize("text", [
        "",
        '"',
        "\\",
        '\\"',
        "end\\",
        "tab\tnew\nline",
        "emoji 🏀 and \x7f",
        "${name}",
    ])
    def test_round_trip(self, text, decode_literal):
        """Test that literals decode back to the original string."""
        literal = render_string_literal(text)
        assert decode_literal(literal) == text
        assert render_string_literal(decode_literal(literal)) == literal

    @pytest.mark.parametrize("text", ["a\ud800b", "\udfff", "\ud83c"])
    def test_lone_surrogate(self, text):
        """Test that surrogate code points are rejected."""
        with pytest.raises(SerializationError) as exc_info:
            render_string_literal(text, field="name")
        assert exc_info.value.field == "name"

    def test_non_string(self):
        """Test that non-strings are rejected."""
        with pytest.raises(SerializationError):
            render_string_literal(b"bytes", field="name")


class TestRenderStructuredRecord:
    """Test metadata dictionary literals."""

    def test_sorted_keys(self):
        """Test that keys are emitted in sorted order."""
        literal = render_structured_record({"LastName": "Morant", "FirstName": "Ja"})
        assert literal == '{"FirstName": "Ja", "LastName": "Morant"}'

    def test_integer_values(self, decode_literal):
        """Test that integers are stored as decimal strings."""
        literal = render_structured_record({"DraftYear": 2019})
        assert literal == '{"DraftYear": "2019"}'
        assert decode_literal(literal) == {"DraftYear": "2019"}
        assert render_structured_record({"DraftYear": "2019"}) == literal

    def test_empty_record(self):
        """Test rendering of an empty record."""
        assert render_structured_record({}) == "{}"

    def test_escaped_keys_and_values(self, decode_literal):
        """Test that keys and values are escaped."""
        record = {'Quote"Key': 'line\nbreak', "Back\\slash": '"}'}
        assert decode_literal(render_structured_record(record)) == record

    def test_round_trip(self, sample_play_record, decode_literal):
        """Test decoding reproduces the record with integers as strings."""
        literal = render_structured_record(sample_play_record)
        decoded = decode_literal(literal)

        assert decoded == {k: str(v) for k, v in sample_play_record.items()}
        assert render_structured_record(decoded) == literal

    @pytest.mark.parametrize("value", [1.5, True, None, ["a"], {"a": "b"}])
    def test_unsupported_value(self, value):
        """Test that unsupported value types name the key."""
        with pytest.raises(SerializationError) as exc_info:
            render_structured_record({"Field": value}, field="metadata")
        assert exc_info.value.field == "metadata.Field"

    def test_non_string_key(self):
        """Test that keys must be strings."""
        with pytest.raises(SerializationError):
            render_structured_record({1: "one"})

    def test_non_mapping(self):
        """Test that non-mappings are rejected."""
        with pytest.raises(SerializationError):
            render_structured_record([("a", "b")])
