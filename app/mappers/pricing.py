import math

# Significant digits kept before rounding up; drops binary noise such as
# 1010.0000000000001 so that 10.1 does not ceil to 10.11.
_SIGNIFICANT_DIGITS = 14


def ceil_to(value: float, decimals: int | None = None) -> float:
    """Round ``value`` up to ``decimals`` places (10.001 -> 10.01 for 2)."""
    if not decimals:
        return float(math.ceil(float(f"{value:.{_SIGNIFICANT_DIGITS}g}")))
    factor = 10 ** decimals
    scaled = float(f"{value * factor:.{_SIGNIFICANT_DIGITS}g}")
    return math.ceil(scaled) / factor


def apply_markup(net: float, markup: float, exchange_rate: float) -> float:
    """Selling price before rounding; ``markup`` is in percentage points."""
    return net * (markup / 100 + 1) * exchange_rate
