from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")


def round_money(value) -> float:
    """Round to 2 decimal places, half away from zero on the decimal representation."""
    return float(Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP))


def parse_money(value) -> float:
    """Accept numbers or display strings such as ``"$1,200.50"`` / ``"(35.00)"``."""
    if value is None:
        raise ValueError("missing money value")

    if isinstance(value, bool):
        raise ValueError("invalid money value")

    if isinstance(value, (int, float)):
        return round_money(value)

    normalized = str(value).strip()
    if not normalized:
        raise ValueError("empty money value")

    is_negative = normalized.startswith("(") and normalized.endswith(")")
    normalized = normalized.replace("$", "").replace(",", "")

    if is_negative:
        normalized = normalized[1:-1]

    try:
        amount = Decimal(normalized).quantize(
            CENT,
            rounding=ROUND_HALF_UP
        )
    except InvalidOperation as exc:
        raise ValueError("invalid money value") from exc

    return float(-amount if is_negative else amount)
