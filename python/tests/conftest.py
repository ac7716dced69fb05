"""
Shared pytest fixtures for paypals-sdk tests.

This module provides common fixtures used across all test files,
including sample payload arguments and the CRC reference vectors.
"""

import json
from pathlib import Path

import pytest


@pytest.fixture
def sample_payload_args():
    """Arguments for the reference PayNow payload."""
    return {
        "recipient": "91234567",
        "amount": "25.00",
        "merchant_name": "Alice",
        "reference": "Bill-42",
        "editable_amount": False,
    }


@pytest.fixture
def sample_payload_body():
    """Expected payload for sample_payload_args, up to the CRC value."""
    return (
        "000201"
        "010211"
        "2638"
        "0009SG.PAYNOW"
        "01010"
        "0211+6591234567"
        "03010"
        "52040000"
        "5303702"
        "540525.00"
        "5802SG"
        "5905Alice"
        "6009Singapore"
        "6211"
        "0107Bill-42"
        "6304"
    )


@pytest.fixture
def crc_vectors():
    """Load CRC-16/CCITT-FALSE reference vectors from fixtures."""
    vectors_path = Path(__file__).parent.parent.parent / "fixtures" / "crc-vectors.json"
    with open(vectors_path, encoding="utf-8") as f:
        data = json.load(f)
    return data["vectors"]


@pytest.fixture
def valid_recipients():
    """Recipient strings accepted as Singapore mobile numbers."""
    return [
        "91234567",
        "81234567",
        "+6591234567",
        "+65 9123 4567",
        " 8765 4321 ",
        "9123\t4567",
    ]


@pytest.fixture
def invalid_recipients():
    """Recipient strings no supported scheme accepts."""
    return [
        "",
        "   ",
        "61234567",       # landline range
        "9123456",        # too short
        "912345678",      # too long
        "+6661234567",    # foreign calling code
        "6591234567",     # calling code without plus
        "+65+6591234567", # prefix twice
        "S1234567A",      # NRIC
        "201912345K",     # UEN
        "9123-4567",
        "abcdefgh",
    ]
