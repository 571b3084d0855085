"""Barcode normalization to GTIN-13."""

import re

from fridgy.errors import InvalidBarcodeLengthError

GTIN13_LENGTH = 13
UPC_A_LENGTH = 12
EAN8_LENGTH = 8

_NON_DIGITS = re.compile(r"\D")


def normalize_barcode(raw: str) -> str:
    """Return the 13-digit GTIN for a scanned EAN-13, UPC-A or EAN-8 code.

    Non-digit characters are stripped before the length is checked, so
    ``"41570054161-2"`` is treated as a 12-digit UPC-A.
    """
    digits = _NON_DIGITS.sub("", raw)
    if len(digits) == GTIN13_LENGTH:
        return digits
    if len(digits) == UPC_A_LENGTH:
        return "0" + digits
    if len(digits) == EAN8_LENGTH:
        return digits.zfill(GTIN13_LENGTH)
    raise InvalidBarcodeLengthError(len(digits))
