"""
Tests for paypals_sdk.tlv module.

Tests field formatting, the recursive Leaf/Group serializer, and the
single-level TLV reader.
"""

import pytest

from paypals_sdk.tlv import (
    FieldTooLong,
    Group,
    InvalidTag,
    Leaf,
    MalformedPayload,
    NonAsciiValue,
    PayloadError,
    format_field,
    parse_tlv,
    serialize,
)


class TestFormatField:
    """Tests for format_field function."""

    def test_basic_field(self):
        """Test tag, zero-padded length and value are concatenated."""
        assert format_field("00", "01") == "000201"

    def test_empty_value(self):
        """Test that an empty value gets a 00 length."""
        assert format_field("59", "") == "5900"

    def test_two_digit_length(self):
        """Test a value longer than nine characters."""
        assert format_field("60", "Singapore!") == "6010Singapore!"

    def test_max_length_allowed(self):
        """Test that exactly 99 characters is accepted."""
        value = "x" * 99
        assert format_field("62", value) == "6299" + value

    def test_over_max_length_rejected(self):
        """Test that 100 characters raises FieldTooLong."""
        with pytest.raises(FieldTooLong) as exc:
            format_field("59", "x" * 100)

        assert "59" in str(exc.value)
        assert "100" in str(exc.value)

    @pytest.mark.parametrize("tag", ["0", "000", "AB", "", "5a", 26])
    def test_invalid_tag_rejected(self, tag):
        """Test that tags must be two digits."""
        with pytest.raises(InvalidTag):
            format_field(tag, "value")

    @pytest.mark.parametrize("value", ["Caf\u00e9", "\u674e\u660e", "Bill \u20ac5"])
    def test_non_ascii_value_rejected(self, value):
        """Test that a value whose byte count differs from its length is rejected."""
        with pytest.raises(NonAsciiValue) as exc:
            format_field("59", value)

        assert "59" in str(exc.value)

    def test_non_ascii_inside_group_rejected(self):
        """Test that a nested non-ASCII value fails the whole group."""
        with pytest.raises(NonAsciiValue):
            serialize([Group("62", [Leaf("01", "R\u00e9f-1")])])


class TestSerialize:
    """Tests for serialize function."""

    def test_empty_sequence(self):
        """Test that no fields serialize to an empty string."""
        assert serialize([]) == ""

    def test_leaves_in_order(self):
        """Test that leaves are concatenated without separators."""
        result = serialize([Leaf("00", "01"), Leaf("01", "11")])
        assert result == "000201010211"

    def test_order_is_preserved(self):
        """Test that field order is not normalized."""
        result = serialize([Leaf("01", "11"), Leaf("00", "01")])
        assert result == "010211000201"

    def test_group_wraps_children(self):
        """Test that a group's length covers its serialized children."""
        result = serialize([Group("62", [Leaf("01", "Bill-42")])])
        assert result == "6211" + "0107Bill-42"

    def test_nested_groups(self):
        """Test groups inside groups."""
        inner = Group("05", [Leaf("01", "ab")])
        result = serialize([Group("26", [Leaf("00", "x"), inner])])
        # inner: 01 02 ab -> "0102ab" (6), wrapped "0506" + 6 = 10
        # outer children: "0001x" (5) + 10 = 15
        assert result == "2615" + "0001x" + "0506" + "0102ab"

    def test_group_too_long(self):
        """Test that an oversized group raises FieldTooLong."""
        group = Group("26", [Leaf("00", "x" * 60), Leaf("01", "y" * 40)])
        with pytest.raises(FieldTooLong):
            serialize([group])

    def test_group_children_stored_as_tuple(self):
        """Test that groups built from lists stay hashable."""
        group = Group("62", [Leaf("01", "ref")])
        assert isinstance(group.children, tuple)
        assert hash(group) == hash(Group("62", (Leaf("01", "ref"),)))


class TestParseTlv:
    """Tests for parse_tlv function."""

    def test_empty_input(self):
        """Test that empty data parses to no fields."""
        assert parse_tlv("") == []

    def test_reads_fields_in_order(self):
        """Test decoding multiple fields."""
        result = parse_tlv("0002015802SG5905Alice")
        assert result == [Leaf("00", "01"), Leaf("58", "SG"), Leaf("59", "Alice")]

    def test_group_content_is_raw(self):
        """Test that nested content comes back undecoded."""
        result = parse_tlv("62110107Bill-42")
        assert result == [Leaf("62", "0107Bill-42")]
        assert parse_tlv(result[0].value) == [Leaf("01", "Bill-42")]

    def test_reads_serializer_output(self):
        """Test that the reader accepts what the serializer produces."""
        fields = [Leaf("00", "01"), Group("62", [Leaf("01", "r")]), Leaf("59", "")]
        parsed = parse_tlv(serialize(fields))
        assert [item.tag for item in parsed] == ["00", "62", "59"]
        assert parsed[1].value == "0101r"
        assert parsed[2].value == ""

    def test_truncated_header(self):
        """Test that a partial header is rejected."""
        with pytest.raises(MalformedPayload):
            parse_tlv("00020159")

    def test_length_past_end(self):
        """Test that a declared length beyond the data is rejected."""
        with pytest.raises(MalformedPayload) as exc:
            parse_tlv("5910Alice")

        assert "59" in str(exc.value)

    def test_non_numeric_length(self):
        """Test that a non-digit length is rejected."""
        with pytest.raises(MalformedPayload):
            parse_tlv("59AAAlice")


class TestExceptionHierarchy:
    """Tests for codec exception classes."""

    def test_all_are_payload_errors(self):
        """Test that codec errors share a base class."""
        assert issubclass(FieldTooLong, PayloadError)
        assert issubclass(InvalidTag, PayloadError)
        assert issubclass(NonAsciiValue, PayloadError)
        assert issubclass(MalformedPayload, PayloadError)

    def test_payload_error_is_exception(self):
        """Test that PayloadError is an Exception."""
        assert issubclass(PayloadError, Exception)
