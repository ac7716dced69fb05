"""
Location: python/paypals_sdk/__init__.py

Summary:
    Main package initialization for paypals-sdk. Exports the payment
    payload codec, the split calculator, their models and exceptions.

Usage:
    from paypals_sdk import build_payload, equal_split, validate_recipient

    # Or import specific modules
    from paypals_sdk.tlv import Group, Leaf, serialize
    from paypals_sdk.crc import crc16_ccitt_false

Version: 0.1.0 (PayNow mobile proxies only)
"""

from .crc import crc16_ccitt_false, verify_checksum
from .money import InvalidAmount
from .payload import (
    ChecksumMismatch,
    PayNowPayloadBuilder,
    UnsupportedRecipientFormat,
    build_payload,
    classify_recipient,
    normalize_recipient,
    parse_payload,
    validate_recipient,
)
from .split import (
    InvalidShareTotal,
    NoParticipants,
    SplitError,
    equal_split,
    exact_split,
    weighted_split,
)
from .tlv import (
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
from .types import (
    DecodedPayload,
    ExactParticipant,
    Participant,
    ParticipantShare,
    PayNowConfig,
    ProxyIdentifier,
    Scheme,
    ShareParticipant,
    SplitBreakdown,
    SplitResult,
)

__version__ = "0.1.0"

__all__ = [
    # Codec
    "format_field",
    "serialize",
    "parse_tlv",
    "Leaf",
    "Group",
    "crc16_ccitt_false",
    "verify_checksum",
    # Payload builder
    "PayNowPayloadBuilder",
    "build_payload",
    "parse_payload",
    "classify_recipient",
    "normalize_recipient",
    "validate_recipient",
    # Split calculator
    "equal_split",
    "weighted_split",
    "exact_split",
    # Types
    "PayNowConfig",
    "ProxyIdentifier",
    "Scheme",
    "DecodedPayload",
    "Participant",
    "ShareParticipant",
    "ExactParticipant",
    "ParticipantShare",
    "SplitBreakdown",
    "SplitResult",
    # Exceptions
    "PayloadError",
    "FieldTooLong",
    "InvalidTag",
    "NonAsciiValue",
    "MalformedPayload",
    "ChecksumMismatch",
    "UnsupportedRecipientFormat",
    "InvalidAmount",
    "SplitError",
    "InvalidShareTotal",
    "NoParticipants",
]
