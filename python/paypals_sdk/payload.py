"""
Location: python/paypals_sdk/payload.py

Summary:
    PayNow payment payload builder. Classifies and normalizes the
    recipient proxy, assembles the EMV merchant-presented field list in
    schema order, and appends the CRC field. Also reads a payload back
    into a DecodedPayload for verification.

Usage:
    The caller (transaction logic outside this package) validates the
    payee's phone number with validate_recipient() when it is saved, and
    later calls build_payload() with the payer's owed amount. The
    returned text is handed unmodified to a QR image renderer.

Example:
    from paypals_sdk.payload import build_payload, validate_recipient

    if validate_recipient("9123 4567"):
        text = build_payload(
            "91234567",
            amount="25.00",
            merchant_name="Alice",
            reference="Bill-42",
        )
"""

import logging
import re
from typing import Optional

from .crc import CRC_TAG_HEADER, crc16_ccitt_false, verify_checksum
from .money import MoneyInput, format_amount, to_decimal, to_money
from .tlv import Field, Group, Leaf, MalformedPayload, PayloadError, parse_tlv, serialize
from .types import DecodedPayload, PayNowConfig, ProxyIdentifier, Scheme

logger = logging.getLogger(__name__)


# EMV top-level tags
TAGS = {
    "PAYLOAD_FORMAT": "00",
    "INITIATION_METHOD": "01",
    "MERCHANT_ACCOUNT_INFO": "26",
    "MERCHANT_CATEGORY": "52",
    "CURRENCY": "53",
    "AMOUNT": "54",
    "COUNTRY": "58",
    "MERCHANT_NAME": "59",
    "MERCHANT_CITY": "60",
    "ADDITIONAL_DATA": "62",
    "CRC": "63",
}

# Sub-tags inside merchant account info (tag 26)
PAYNOW_TAGS = {
    "DOMAIN": "00",
    "PROXY_TYPE": "01",
    "PROXY_VALUE": "02",
    "AMOUNT_EDITABLE": "03",
}

# Sub-tags inside additional data (tag 62)
ADDITIONAL_DATA_TAGS = {
    "BILL_REFERENCE": "01",
}

PAYLOAD_FORMAT_INDICATOR = "01"

_WHITESPACE = re.compile(r"\s+")


class UnsupportedRecipientFormat(PayloadError):
    """Exception raised when a recipient matches no supported proxy scheme."""
    pass


class ChecksumMismatch(MalformedPayload):
    """Exception raised when a payload's CRC field does not match its content."""
    pass


def _scheme_patterns(config: PayNowConfig) -> list[tuple[Scheme, re.Pattern]]:
    # Eight-digit mobile numbers start with 8 or 9
    prefix = re.escape(config.calling_code)
    return [
        (Scheme.MOBILE, re.compile(rf"^(?:{prefix})?[89]\d{{7}}$")),
    ]


class PayNowPayloadBuilder:
    """
    Builds PayNow payloads for one set of scheme constants.

    Instances hold no per-call state and can be shared between threads.

    Attributes:
        config: Constants written into every payload
    """

    def __init__(self, config: Optional[PayNowConfig] = None):
        """
        Initialize the builder.

        Args:
            config: Optional PayNowConfig (Singapore defaults if omitted)
        """
        self.config = config or PayNowConfig()
        self._patterns = _scheme_patterns(self.config)

    def classify_recipient(self, recipient: str) -> Scheme:
        """
        Determine the proxy scheme of a recipient.

        Whitespace anywhere in the input is ignored.

        Args:
            recipient: Raw proxy string, e.g. "+65 9123 4567"

        Returns:
            The matching Scheme

        Raises:
            UnsupportedRecipientFormat: If no scheme matches
        """
        if not isinstance(recipient, str):
            raise UnsupportedRecipientFormat(f"Recipient must be a string, got {recipient!r}")

        cleaned = _WHITESPACE.sub("", recipient)
        for scheme, pattern in self._patterns:
            if pattern.match(cleaned):
                return scheme
        raise UnsupportedRecipientFormat(f"Unsupported recipient format: {recipient!r}")

    def validate_recipient(self, recipient: str) -> bool:
        """
        Check whether build_payload() would accept a recipient.

        Returns:
            True if the recipient matches a supported scheme
        """
        try:
            self.classify_recipient(recipient)
        except UnsupportedRecipientFormat:
            return False
        return True

    def normalize_recipient(self, recipient: str) -> ProxyIdentifier:
        """
        Classify a recipient and convert it to international form.

        The calling-code prefix appears exactly once in the result.

        Raises:
            UnsupportedRecipientFormat: If no scheme matches
        """
        scheme = self.classify_recipient(recipient)
        cleaned = _WHITESPACE.sub("", recipient)

        if scheme is Scheme.MOBILE:
            prefix = self.config.calling_code
            if cleaned.startswith(prefix):
                cleaned = cleaned[len(prefix):]
            cleaned = prefix + cleaned

        return ProxyIdentifier(raw=recipient, normalized=cleaned.upper(), scheme=scheme)

    def build_fields(
        self,
        recipient: str,
        amount: Optional[MoneyInput] = None,
        merchant_name: str = "",
        reference: str = "",
        editable_amount: bool = False,
    ) -> list[Field]:
        """
        Assemble the payload fields in schema order, without the CRC.

        See build_payload() for arguments and errors.
        """
        proxy = self.normalize_recipient(recipient)

        # Amount-less payloads are allowed; the payer types the amount
        amount_value = None
        if amount is not None:
            amount_value = to_money(amount)

        fields: list[Field] = [
            Leaf(TAGS["PAYLOAD_FORMAT"], PAYLOAD_FORMAT_INDICATOR),
            Leaf(TAGS["INITIATION_METHOD"], self.config.initiation_method),
            Group(TAGS["MERCHANT_ACCOUNT_INFO"], [
                Leaf(PAYNOW_TAGS["DOMAIN"], self.config.domain),
                Leaf(PAYNOW_TAGS["PROXY_TYPE"], proxy.scheme.value),
                Leaf(PAYNOW_TAGS["PROXY_VALUE"], proxy.normalized),
                Leaf(PAYNOW_TAGS["AMOUNT_EDITABLE"], "1" if editable_amount else "0"),
            ]),
            Leaf(TAGS["MERCHANT_CATEGORY"], self.config.merchant_category),
            Leaf(TAGS["CURRENCY"], self.config.currency),
        ]
        if amount_value is not None and amount_value > 0:
            fields.append(Leaf(TAGS["AMOUNT"], format_amount(amount_value)))
        fields.extend([
            Leaf(TAGS["COUNTRY"], self.config.country),
            Leaf(TAGS["MERCHANT_NAME"], merchant_name),
            Leaf(TAGS["MERCHANT_CITY"], self.config.merchant_city),
        ])
        if reference:
            fields.append(Group(TAGS["ADDITIONAL_DATA"], [
                Leaf(ADDITIONAL_DATA_TAGS["BILL_REFERENCE"], reference),
            ]))
        return fields

    def build_payload(
        self,
        recipient: str,
        amount: Optional[MoneyInput] = None,
        merchant_name: str = "",
        reference: str = "",
        editable_amount: bool = False,
    ) -> str:
        """
        Encode a PayNow payment payload.

        The CRC is computed over every preceding character plus the
        "6304" header of the CRC field itself, then appended as the
        final field.

        Args:
            recipient: Raw proxy string (mobile number)
            amount: Amount to pay; None or zero builds an amount-less payload
            merchant_name: Payee display name
            reference: Bill reference; omitted from the payload when empty
            editable_amount: Whether the payer may change the amount

        Returns:
            The complete payload text

        Raises:
            UnsupportedRecipientFormat: If the recipient matches no scheme
            InvalidAmount: If amount is negative, non-finite, not numeric
                or too large to carry cents
            NonAsciiValue: If merchant_name or reference has non-ASCII
                characters, since field lengths count bytes
            FieldTooLong: If any field value exceeds 99 characters
        """
        body = serialize(self.build_fields(
            recipient,
            amount=amount,
            merchant_name=merchant_name,
            reference=reference,
            editable_amount=editable_amount,
        ))
        checksum = crc16_ccitt_false(body + CRC_TAG_HEADER)
        payload = body + CRC_TAG_HEADER + checksum

        logger.debug(
            "Built PayNow payload: amount=%s reference=%r checksum=%s length=%d",
            amount, reference, checksum, len(payload),
        )
        return payload


def parse_payload(payload: str) -> DecodedPayload:
    """
    Decode a PayNow payload after verifying its checksum.

    Args:
        payload: Complete payload text ending in a CRC field

    Returns:
        DecodedPayload with the top-level and nested fields

    Raises:
        ChecksumMismatch: If the CRC field is missing or wrong
        MalformedPayload: If the TLV structure is broken or a required
            field is missing
    """
    if not verify_checksum(payload):
        raise ChecksumMismatch("Payload checksum does not match its content")

    top = {item.tag: item.value for item in parse_tlv(payload)}
    try:
        account = {item.tag: item.value for item in parse_tlv(top[TAGS["MERCHANT_ACCOUNT_INFO"]])}
        additional = {
            item.tag: item.value
            for item in parse_tlv(top.get(TAGS["ADDITIONAL_DATA"], ""))
        }
        amount_text = top.get(TAGS["AMOUNT"])
        return DecodedPayload(
            payload_format=top[TAGS["PAYLOAD_FORMAT"]],
            initiation_method=top[TAGS["INITIATION_METHOD"]],
            domain=account[PAYNOW_TAGS["DOMAIN"]],
            proxy_scheme=Scheme(account[PAYNOW_TAGS["PROXY_TYPE"]]),
            proxy_value=account[PAYNOW_TAGS["PROXY_VALUE"]],
            editable_amount=account.get(PAYNOW_TAGS["AMOUNT_EDITABLE"]) == "1",
            merchant_category=top[TAGS["MERCHANT_CATEGORY"]],
            currency=top[TAGS["CURRENCY"]],
            amount=to_decimal(amount_text) if amount_text is not None else None,
            country=top[TAGS["COUNTRY"]],
            merchant_name=top[TAGS["MERCHANT_NAME"]],
            merchant_city=top[TAGS["MERCHANT_CITY"]],
            reference=additional.get(ADDITIONAL_DATA_TAGS["BILL_REFERENCE"]),
            checksum=top[TAGS["CRC"]],
        )
    except KeyError as exc:
        raise MalformedPayload(f"Payload is missing required field {exc.args[0]}") from None
    except ValueError as exc:
        raise MalformedPayload(f"Payload contains an invalid value: {exc}") from None


_default_builder = PayNowPayloadBuilder()


def classify_recipient(recipient: str) -> Scheme:
    """Classify a recipient with the default Singapore configuration."""
    return _default_builder.classify_recipient(recipient)


def normalize_recipient(recipient: str) -> ProxyIdentifier:
    """Normalize a recipient with the default Singapore configuration."""
    return _default_builder.normalize_recipient(recipient)


def validate_recipient(recipient: str) -> bool:
    """Validate a recipient with the default Singapore configuration."""
    return _default_builder.validate_recipient(recipient)


def build_payload(
    recipient: str,
    amount: Optional[MoneyInput] = None,
    merchant_name: str = "",
    reference: str = "",
    editable_amount: bool = False,
) -> str:
    """Build a payload with the default Singapore configuration."""
    return _default_builder.build_payload(
        recipient,
        amount=amount,
        merchant_name=merchant_name,
        reference=reference,
        editable_amount=editable_amount,
    )
