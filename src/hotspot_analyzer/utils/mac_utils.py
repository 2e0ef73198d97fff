"""
MAC address helpers.

48-bit hardware addresses are carried as plain integers; these helpers
convert between that form and hexadecimal text.
"""

import string

from ..core.models import InvalidAddress

BYTES_IN_EUI48 = 6
HEX_DIGITS_IN_EUI48 = BYTES_IN_EUI48 * 2


def parse_mac(text: str) -> int:
    """
    Parse a MAC address into a 48-bit integer.

    Any character that is not a hex digit is treated as a separator and
    dropped, so ``00:11:22:aa:bb:cc``, ``00-11-22-AA-BB-CC`` and
    ``001122aabbcc`` all parse to the same value.

    Args:
        text: MAC address text

    Returns:
        Address as an unsigned integer, most significant digit first

    Raises:
        InvalidAddress: If the text does not hold exactly 12 hex digits
    """
    if text is None:
        raise InvalidAddress("Bad MAC address: None")

    mac = 0
    count = 0
    for char in text:
        if char in string.hexdigits:
            mac = (mac << 4) | int(char, 16)
            count += 1

    if count != HEX_DIGITS_IN_EUI48 or count % 2:
        raise InvalidAddress(f"Bad MAC address: '{text}'")
    return mac


def format_mac(mac: int) -> str:
    """Format a 48-bit integer as lowercase colon separated hex."""
    return ":".join(
        f"{(mac >> (n * 8)) & 0xff:02x}"
        for n in range(BYTES_IN_EUI48 - 1, -1, -1)
    )


def normalize_mac(text: str) -> str:
    """Normalize MAC address text to the canonical lowercase form."""
    return format_mac(parse_mac(text))
