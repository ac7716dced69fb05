"""
Location: python/paypals_sdk/types.py

Summary:
    Pydantic models for paypals-sdk. Defines the payload builder
    configuration, the decoded view of a payment payload, and the
    request/result structures of the split calculator.

Usage:
    These models are imported by payload.py and split.py. Money values
    are Decimal internally and serialize as strings in JSON mode so no
    precision is lost on the way to a database or an HTTP response.
    Every model accepts both snake_case and camelCase field names.

Example:
    from paypals_sdk.types import Participant, ShareParticipant

    people = [Participant(identity="alice"), Participant(identity="bob")]
    shares = [
        ShareParticipant(identity="alice", share_percentage="0.6"),
        ShareParticipant(identity="bob", share_percentage="0.4"),
    ]
"""

from decimal import Decimal
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field


Identity = Union[int, str]


class Scheme(str, Enum):
    """
    PayNow proxy schemes, valued by their proxy-type tag.

    Only MOBILE is classified by this library; UEN and VPA are listed
    so decoded payloads from other issuers keep their meaning.
    """
    MOBILE = "0"
    UEN = "2"
    VPA = "3"


class PayNowConfig(BaseModel):
    """
    Constants written into every payload.

    Defaults are the Singapore PayNow values.

    Attributes:
        domain: Globally unique identifier inside merchant account info
        calling_code: Country calling-code prefix for mobile proxies
        currency: ISO 4217 numeric currency code
        country: ISO 3166 alpha-2 country code
        merchant_city: City written into tag 60
        merchant_category: Merchant category code (person-to-person)
        initiation_method: "11" static, "12" dynamic
    """
    domain: str = "SG.PAYNOW"
    calling_code: str = Field("+65", alias="callingCode")
    currency: str = "702"
    country: str = "SG"
    merchant_city: str = Field("Singapore", alias="merchantCity")
    merchant_category: str = Field("0000", alias="merchantCategory")
    initiation_method: Literal["11", "12"] = Field("11", alias="initiationMethod")

    model_config = {"populate_by_name": True, "frozen": True}


class ProxyIdentifier(BaseModel):
    """
    A classified and normalized payee address.

    Attributes:
        raw: Input as given by the caller
        normalized: International form, e.g. "+6591234567"
        scheme: Proxy scheme the input was classified into
    """
    raw: str
    normalized: str
    scheme: Scheme

    model_config = {"frozen": True}


class DecodedPayload(BaseModel):
    """
    Fields read back from an encoded payment payload.

    Attributes:
        payload_format: Tag 00 value
        initiation_method: Tag 01 value
        domain: Merchant account info sub-tag 00
        proxy_scheme: Merchant account info sub-tag 01
        proxy_value: Merchant account info sub-tag 02
        editable_amount: Merchant account info sub-tag 03 == "1"
        merchant_category: Tag 52 value
        currency: Tag 53 value
        amount: Tag 54 value, None for amount-less payloads
        country: Tag 58 value
        merchant_name: Tag 59 value
        merchant_city: Tag 60 value
        reference: Additional data sub-tag 01, None if absent
        checksum: Tag 63 value
    """
    payload_format: str = Field(alias="payloadFormat")
    initiation_method: str = Field(alias="initiationMethod")
    domain: str
    proxy_scheme: Scheme = Field(alias="proxyScheme")
    proxy_value: str = Field(alias="proxyValue")
    editable_amount: bool = Field(alias="editableAmount")
    merchant_category: str = Field(alias="merchantCategory")
    currency: str
    amount: Optional[Decimal] = None
    country: str
    merchant_name: str = Field(alias="merchantName")
    merchant_city: str = Field(alias="merchantCity")
    reference: Optional[str] = None
    checksum: str

    model_config = {"populate_by_name": True}


class Participant(BaseModel):
    """A participant in an equal split."""
    identity: Identity


class ShareParticipant(BaseModel):
    """
    A participant in a weighted split.

    Attributes:
        identity: Caller-defined participant key (user id, username)
        share_percentage: Fraction of the total, e.g. 0.25 for 25%
    """
    identity: Identity
    share_percentage: Decimal = Field(alias="sharePercentage")

    model_config = {"populate_by_name": True}


class ExactParticipant(BaseModel):
    """
    A participant with a fixed amount in an exact split.

    Attributes:
        identity: Caller-defined participant key
        amount_owed: Amount this participant owes
    """
    identity: Identity
    amount_owed: Decimal = Field(alias="amountOwed")

    model_config = {"populate_by_name": True}


class ParticipantShare(BaseModel):
    """
    One participant's computed amounts.

    base_share + tax_share + surcharge_share == amount_owed.

    Attributes:
        identity: Participant key from the request
        amount_owed: Total this participant owes
        base_share: Portion of the base amount
        tax_share: Portion of the tax
        surcharge_share: Portion of the surcharge
    """
    identity: Identity
    amount_owed: Decimal = Field(alias="amountOwed")
    base_share: Decimal = Field(alias="baseShare")
    tax_share: Decimal = Field(alias="taxShare")
    surcharge_share: Decimal = Field(alias="surchargeShare")

    model_config = {"populate_by_name": True}


class SplitBreakdown(BaseModel):
    """
    Totals of a split. total_amount == base + tax + surcharge.
    """
    base_amount: Decimal = Field(alias="baseAmount")
    tax_amount: Decimal = Field(alias="taxAmount")
    surcharge_amount: Decimal = Field(alias="surchargeAmount")
    total_amount: Decimal = Field(alias="totalAmount")

    model_config = {"populate_by_name": True}


class SplitResult(BaseModel):
    """
    Result of any split mode.

    Attributes:
        mode: Which calculation produced the result
        participants: Per-participant amounts, in request order
        breakdown: Totals shared by every mode
    """
    mode: Literal["equal", "weighted", "exact"]
    participants: list[ParticipantShare]
    breakdown: SplitBreakdown

    def amount_for(self, identity: Identity) -> Decimal:
        """
        Look up the amount owed by one participant.

        Raises:
            KeyError: If identity is not part of this split
        """
        for share in self.participants:
            if share.identity == identity:
                return share.amount_owed
        raise KeyError(identity)
