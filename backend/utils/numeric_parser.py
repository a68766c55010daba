from __future__ import annotations

import math
import re
from typing import Optional

MULTIPLIERS = {
    "k": 1_000,
    "thousand": 1_000,
    "m": 1_000_000,
    "million": 1_000_000,
    "b": 1_000_000_000,
    "billion": 1_000_000_000,
}

# Leading number, optionally followed by a multiplier that is not the start
# of a unit (so "2.5 mwh" stays 2.5). Single letters only count when attached
# to the number: "2.5m" is 2.5 million, "2 m" is 2 (metres).
_LEADING_NUMBER_RE = re.compile(
    r"^(-?[0-9]*\.?[0-9]+)(?:\s*(thousand|million|billion)(?![a-z])|([kmb])(?![a-z]))?"
)


def parse_disclosure_number(text: Optional[str]) -> Optional[float]:
    """Best-effort number from a disclosure value such as "15,000 MWh" or "2.5m".

    Returns None for qualitative values.
    """
    if text is None:
        return None

    s = text.strip().lower()
    # Thousand separators carry no value.
    s = s.replace(",", "")
    if not s:
        return None

    try:
        value = float(s.replace(" ", ""))
    except ValueError:
        pass
    else:
        # "nan" and "inf" are words here, not numbers.
        return value if math.isfinite(value) else None

    m = _LEADING_NUMBER_RE.match(s)
    if not m:
        return None

    num_str, word, letter = m.groups()
    num = float(num_str)
    mult_str = word or letter
    if mult_str:
        num *= MULTIPLIERS[mult_str]
    return num
