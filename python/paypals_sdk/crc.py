"""
Location: python/paypals_sdk/crc.py

Summary:
    CRC-16/CCITT-FALSE checksum used as the trailing field of EMV
    payloads (init 0xFFFF, poly 0x1021, MSB first, no reflection,
    no final XOR).

Usage:
    payload.py appends the checksum; verify_checksum() lets a caller
    check a payload it received from elsewhere.
"""

CRC_TAG_HEADER = "6304"

_INITIAL = 0xFFFF
_POLYNOMIAL = 0x1021


def crc16_ccitt_false(data: str) -> str:
    """
    Compute CRC-16/CCITT-FALSE over the UTF-8 bytes of data.

    Args:
        data: Text to checksum

    Returns:
        Four uppercase hex digits
    """
    crc = _INITIAL
    for byte in data.encode("utf-8"):
        crc ^= byte << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = (crc << 1) ^ _POLYNOMIAL
            else:
                crc <<= 1
        crc &= 0xFFFF
    return f"{crc:04X}"


def verify_checksum(payload: str) -> bool:
    """
    Check the trailing CRC field of a payload.

    The checksum covers everything up to and including the "6304"
    header of the CRC field itself.

    Args:
        payload: Complete payload ending in a CRC field

    Returns:
        True if the embedded checksum matches
    """
    if len(payload) < 8 or payload[-8:-4] != CRC_TAG_HEADER:
        return False
    return crc16_ccitt_false(payload[:-4]) == payload[-4:].upper()
