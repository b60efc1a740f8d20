import math
from typing import Iterable


def format_money(x: float) -> str:
    """``10.5 -> "$10.50"``, ``1000 -> "$1,000.00"``, ``-5 -> "-$5.00"``.

    Cents come from rounding the fractional remainder only (half away from
    zero), so the dollar part never drifts from the truncated value unless
    the cents carry over to 100.
    """
    abs_val = abs(x)
    dollars = int(abs_val)
    cents = int(math.floor((abs_val - dollars) * 100 + 0.5))
    if cents >= 100:
        dollars += 1
        cents -= 100

    formatted = f"${dollars:,}.{cents:02d}"
    if x < 0:
        return f"-{formatted}"
    return formatted


def format_card(c: str) -> str:
    if len(c) < 2:
        return c
    # rank and suit only; anything past the second character is dropped
    return c[0].upper() + c[1].lower()


def format_cards(cards: Iterable[str]) -> str:
    return " ".join(format_card(c) for c in cards)


def format_timestamp(start_date_utc: str) -> str:
    # "2023-12-05T02:50:49.886Z" -> "2023-12-05 02:50:49"
    return start_date_utc.split(".", 1)[0].replace("T", " ")
