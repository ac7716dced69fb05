"""
Location: python/paypals_sdk/tlv.py

Summary:
    Tag-length-value encoding used by EMV merchant-presented payloads.
    A field is either a Leaf (tag + text) or a Group (tag + nested
    fields); both are serialized by the same recursive function so the
    declared length of a group always matches its encoded children.

Usage:
    Used by payload.py to assemble and decode PayNow payloads. Has no
    knowledge of payment semantics.

Example:
    from paypals_sdk.tlv import Group, Leaf, serialize

    serialize([
        Leaf("00", "01"),
        Group("62", [Leaf("01", "Bill-42")]),
    ])
    # "000201621101" + "07Bill-42"
"""

import re
from dataclasses import dataclass, field
from typing import Sequence, Union

# Two-digit length header caps a single value at 99 characters
MAX_VALUE_LENGTH = 99

_TAG_PATTERN = re.compile(r"^\d{2}$")


class PayloadError(Exception):
    """Base exception for TLV and payload encoding failures."""
    pass


class FieldTooLong(PayloadError):
    """Exception raised when a value does not fit the two-digit length header."""
    pass


class InvalidTag(PayloadError):
    """Exception raised when a tag is not exactly two digits."""
    pass


class NonAsciiValue(PayloadError):
    """Exception raised when a value has characters outside ASCII."""
    pass


class MalformedPayload(PayloadError):
    """Exception raised when TLV data cannot be decoded."""
    pass


@dataclass(frozen=True)
class Leaf:
    """
    A TLV field carrying plain text.

    Attributes:
        tag: Two-digit numeric tag
        value: Field content
    """
    tag: str
    value: str


@dataclass(frozen=True)
class Group:
    """
    A TLV field whose value is the serialization of nested fields.

    Attributes:
        tag: Two-digit numeric tag
        children: Nested fields, serialized in order
    """
    tag: str
    children: tuple["Field", ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any sequence but store a tuple to keep the group hashable
        object.__setattr__(self, "children", tuple(self.children))


Field = Union[Leaf, Group]


def format_field(tag: str, value: str) -> str:
    """
    Encode a single field as tag + two-digit length + value.

    Args:
        tag: Two-digit numeric tag
        value: Field content

    Returns:
        The encoded field

    Raises:
        InvalidTag: If tag is not two digits
        NonAsciiValue: If value is not plain ASCII, where the length
            header would disagree with the byte count readers expect
        FieldTooLong: If value is longer than 99 characters
    """
    if not isinstance(tag, str) or not _TAG_PATTERN.match(tag):
        raise InvalidTag(f"Tag must be two digits, got {tag!r}")
    if not value.isascii():
        raise NonAsciiValue(f"Value for tag {tag} must be ASCII, got {value!r}")
    if len(value) > MAX_VALUE_LENGTH:
        raise FieldTooLong(
            f"Value for tag {tag} is {len(value)} characters, limit is {MAX_VALUE_LENGTH}"
        )
    return f"{tag}{len(value):02d}{value}"


def serialize(fields: Sequence[Field]) -> str:
    """
    Serialize fields in order, recursing into groups.

    Args:
        fields: Leaf and Group fields

    Returns:
        Concatenated TLV string with no separators
    """
    parts = []
    for item in fields:
        if isinstance(item, Group):
            parts.append(format_field(item.tag, serialize(item.children)))
        else:
            parts.append(format_field(item.tag, item.value))
    return "".join(parts)


def parse_tlv(data: str) -> list[Leaf]:
    """
    Decode one level of TLV data.

    Nested groups come back as leaves whose value is the raw group
    content; call parse_tlv again on that value to descend.

    Args:
        data: Concatenated TLV fields

    Returns:
        Fields in the order they appear

    Raises:
        MalformedPayload: On a truncated header, a non-numeric length,
            or a length running past the end of the data
    """
    items: list[Leaf] = []
    idx = 0
    total = len(data)
    while idx < total:
        if idx + 4 > total:
            raise MalformedPayload(f"Truncated field header at offset {idx}")
        tag = data[idx:idx + 2]
        length_text = data[idx + 2:idx + 4]
        if not _TAG_PATTERN.match(tag) or not length_text.isdigit():
            raise MalformedPayload(f"Invalid field header {data[idx:idx + 4]!r} at offset {idx}")
        end = idx + 4 + int(length_text)
        if end > total:
            raise MalformedPayload(f"Field {tag} at offset {idx} runs past end of data")
        items.append(Leaf(tag, data[idx + 4:end]))
        idx = end
    return items
