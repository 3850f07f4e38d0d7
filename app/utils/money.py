from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import List, Sequence

Money = Decimal

CENT = Decimal("0.01")
ZERO = Decimal("0")


def D(x) -> Money:
    if isinstance(x, Decimal):
        return x
    return Decimal(str(x or "0"))


def round_money(x) -> Money:
    """Half-up to whole cents."""
    return D(x).quantize(CENT, rounding=ROUND_HALF_UP)


def to_float(x) -> float:
    return float(round_money(x))


def allocate_cents(total: Money, shares: Sequence[Money]) -> List[Money]:
    """
    Split a cent-rounded `total` over unrounded `shares` so the parts add up
    to `total` exactly (largest remainder; ties go to the earlier share).
    """
    total = round_money(total)
    floors = [D(s).quantize(CENT, rounding=ROUND_DOWN) for s in shares]
    leftover = int((total - sum(floors, ZERO)) / CENT)
    if leftover <= 0:
        return floors

    by_remainder = sorted(
        range(len(shares)),
        key=lambda i: (D(shares[i]) - floors[i], -i),
        reverse=True,
    )
    for i in by_remainder[:leftover]:
        floors[i] += CENT
    return floors
