#!/usr/bin/env python3
"""
Verify the checksum implementation against fixed test vectors.
Run with: python scripts/verify-crc-vectors.py

This script validates that crc16_ccitt_false() reproduces the reference
CRC-16/CCITT-FALSE values, and that payloads produced by build_payload()
carry a checksum that verifies over their own content.

IMPORTANT: This is a RELEASE GATE requirement. This script must pass
before any release.
"""
import json
import sys
from pathlib import Path

from paypals_sdk import build_payload, crc16_ccitt_false, verify_checksum

SAMPLE_PAYLOADS = [
    {"recipient": "91234567", "amount": "25.00", "merchant_name": "Alice", "reference": "Bill-42"},
    {"recipient": "+65 8123 4567", "amount": None, "merchant_name": "Bob", "reference": ""},
]


def main() -> int:
    """
    Main verification function.

    Returns:
        0 if all vectors pass, 1 if any fail
    """
    fixtures_path = Path(__file__).parent.parent / 'fixtures' / 'crc-vectors.json'

    if not fixtures_path.exists():
        print(f'ERROR: Fixtures file not found at {fixtures_path}')
        return 1

    with open(fixtures_path, encoding='utf-8') as f:
        data = json.load(f)

    passed = 0
    failed = 0

    print('Verifying checksum implementation against test vectors...\n')

    for vector in data['vectors']:
        name = vector['name']
        actual = crc16_ccitt_false(vector['input'])

        if actual == vector['crc']:
            print(f'[PASS] {name}')
            passed += 1
        else:
            print(f'[FAIL] {name}')
            print(f'     Expected: {vector["crc"]}')
            print(f'     Actual:   {actual}')
            failed += 1

    for sample in SAMPLE_PAYLOADS:
        name = f'payload for {sample["recipient"]!r}'
        payload = build_payload(
            sample['recipient'],
            amount=sample['amount'],
            merchant_name=sample['merchant_name'],
            reference=sample['reference'],
        )

        if verify_checksum(payload):
            print(f'[PASS] {name}')
            passed += 1
        else:
            print(f'[FAIL] {name}')
            print(f'     Payload: {payload}')
            failed += 1

    print(f'\n{"=" * 50}')
    print(f'Results: {passed} passed, {failed} failed')

    if failed > 0:
        print('\nVERIFICATION FAILED - Release gate not passed!')
        return 1

    print('\nVERIFICATION PASSED - checksum implementation is correct.')
    return 0


if __name__ == '__main__':
    sys.exit(main())
