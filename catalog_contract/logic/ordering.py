"""Title normalisation and order checks for sorted product listings.

Comparison follows a locale-style collation: accents and case are compared
only after the base letters, so "Éclair" sorts next to "eclair" rather than
after "zebra".
"""

from __future__ import annotations

import re
import unicodedata
from typing import List, Sequence, Tuple

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Trim, collapse internal whitespace and case-fold a product title."""
    return _WHITESPACE_RE.sub(" ", str(title)).strip().casefold()


def collation_key(text: str) -> Tuple[str, str]:
    """Primary key on base letters, secondary key on the full form."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base, unicodedata.normalize("NFC", text))


def adjacent_inversions(titles: Sequence[str], *, descending: bool = False) -> List[Tuple[int, str, str]]:
    """List every adjacent pair that breaks the expected order.

    Each entry is `(index, left, right)` with the normalised titles, where
    `index` is the position of the left element.
    """
    normalized = [normalize_title(t) for t in titles]
    inversions = []
    for idx, (left, right) in enumerate(zip(normalized, normalized[1:])):
        lk, rk = collation_key(left), collation_key(right)
        out_of_order = lk < rk if descending else lk > rk
        if out_of_order:
            inversions.append((idx, left, right))
    return inversions


__all__ = ["adjacent_inversions", "collation_key", "normalize_title"]
