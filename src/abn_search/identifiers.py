# Copyright 2026 The abn-search Authors.
# SPDX-License-Identifier: Apache-2.0

"""Normalize, validate and format ABN and ACN identifiers."""

import re

ABN_WIDTH = 11
ACN_WIDTH = 9

ABN_WEIGHTS = (10, 1, 3, 5, 7, 9, 11, 13, 15, 17, 19)
ACN_WEIGHTS = (8, 7, 6, 5, 4, 3, 2, 1)

_RE_WHITESPACE = re.compile(r"\s+")
_RE_ABN = re.compile(r"[0-9]{11}")
_RE_ACN = re.compile(r"[0-9]{9}")


def normalize(value: object, width: int) -> str | None:
    """Strip whitespace and left-pad with zeros to ``width``.

    Integers and strings are both accepted. ``None`` stays ``None``. Nothing is
    ever rejected here; malformed input simply fails validation later.
    """
    if value is None:
        return None
    return _RE_WHITESPACE.sub("", str(value)).rjust(width, "0")


def normalize_abn(value: object) -> str | None:
    return normalize(value, ABN_WIDTH)


def normalize_acn(value: object) -> str | None:
    return normalize(value, ACN_WIDTH)


def is_valid_abn(value: object) -> bool:
    """Check an ABN against the modulus 89 checksum.

    The first digit has 1 subtracted before weighting.
    """
    abn = normalize_abn(value)
    if abn is None or not _RE_ABN.fullmatch(abn):
        return False
    digits = [int(c) for c in abn]
    digits[0] -= 1
    total = sum(w * d for w, d in zip(ABN_WEIGHTS, digits))
    return total % 89 == 0


def is_valid_acn(value: object) -> bool:
    """Check an ACN against the modulus 10 checksum (last digit is the check digit)."""
    acn = normalize_acn(value)
    if acn is None or not _RE_ACN.fullmatch(acn):
        return False
    digits = [int(c) for c in acn]
    total = sum(w * d for w, d in zip(ACN_WEIGHTS, digits[:8]))
    return (10 - total % 10) % 10 == digits[8]


def format_abn(value: object) -> str:
    """Return ``"XX XXX XXX XXX"`` for a valid ABN, ``""`` otherwise."""
    abn = normalize_abn(value)
    if abn is None or not is_valid_abn(abn):
        return ""
    return f"{abn[:2]} {abn[2:5]} {abn[5:8]} {abn[8:]}"


def format_acn(value: object) -> str:
    """Return ``"XXX XXX XXX"`` for a valid ACN, ``""`` otherwise."""
    acn = normalize_acn(value)
    if acn is None or not is_valid_acn(acn):
        return ""
    return f"{acn[:3]} {acn[3:6]} {acn[6:]}"
