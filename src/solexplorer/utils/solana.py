from __future__ import annotations

from typing import Tuple

from solexplorer.core.enums import InputKind

# base58 lengths: signatures are ~87-88 chars, pubkeys 32-44
SIGNATURE_LEN = (60, 90)
ADDRESS_LEN = (30, 45)


def identify_input(text: str) -> Tuple[InputKind, str]:
    """Route a search string by length. Returns the kind and the trimmed value."""
    value = (text or "").strip()
    if not value:
        return InputKind.INVALID, ""

    n = len(value)
    if SIGNATURE_LEN[0] <= n <= SIGNATURE_LEN[1]:
        return InputKind.TX, value
    if ADDRESS_LEN[0] <= n <= ADDRESS_LEN[1]:
        return InputKind.ADDRESS, value
    return InputKind.INVALID, value
