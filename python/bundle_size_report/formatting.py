from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

UNITS = ("B", "KB", "MB")


def _trim(value: float, places: int) -> str:
    # Ties round up on the float's exact value.
    rounded = Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    text = f"{rounded:f}"
    return text.rstrip("0").rstrip(".") if "." in text else text


def format_bytes(size: int) -> str:
    if size == 0:
        return "0 B"
    index = min(int(math.floor(math.log(size) / math.log(1024))), len(UNITS) - 1)
    return f"{_trim(size / 1024**index, 2)} {UNITS[index]}"


def format_percent(percent: float) -> str:
    return f"{_trim(percent, 1)}%"
