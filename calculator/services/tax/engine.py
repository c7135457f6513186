"""
Nigeria Personal Income Tax and VAT engine (Tax Act 2025, effective 2026).

Pure functions only: no I/O, no logging, no shared state.
All arithmetic is done in Decimal and rounded to kobo once, on output.
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from .config import (
    KOBO,
    MAX_AMOUNT,
    RENT_RELIEF_RATE,
    RENT_RELIEF_CAP,
    PIT_EXEMPT_THRESHOLD,
    PERSONAL_INCOME_TAX_BANDS_2026,
    VAT_RATE,
)


class InvalidInputError(ValueError):
    """
    Raised when a monetary input is negative, NaN, infinite, too large
    or not a number.
    """

    def __init__(self, field_name, value, reason):
        self.field_name = field_name
        self.value = value
        self.reason = reason
        super().__init__(f"{field_name} {reason} (got {value!r})")


def to_money(value, field_name: str = "amount") -> Decimal:
    """
    Convert a caller-supplied number into a validated Decimal.

    Accepts int, float and Decimal. Floats go through their shortest
    string form so 0.1 becomes Decimal("0.1"), not its binary expansion.
    Amounts above MAX_AMOUNT are rejected rather than overflowing the
    Decimal context when rounded to kobo.
    """
    # bool is an int subclass but never a monetary amount
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidInputError(field_name, value, "must be a real number")

    amount = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    if not amount.is_finite():
        raise InvalidInputError(field_name, value, "must be a finite number")
    if amount < 0:
        raise InvalidInputError(field_name, value, "must not be negative")
    if amount > MAX_AMOUNT:
        raise InvalidInputError(field_name, value, f"must not exceed {MAX_AMOUNT}")
    return amount


def round_kobo(value: Decimal) -> Decimal:
    return value.quantize(KOBO, rounding=ROUND_HALF_UP)


# =========================
# VALUE OBJECTS
# =========================
@dataclass(frozen=True)
class PITInput:
    gross_annual_income: Decimal
    annual_rent_paid: Decimal = Decimal("0")


@dataclass(frozen=True)
class BandCharge:
    """A slice of taxable income and the tax charged on it."""
    rate: Decimal
    lower: Decimal
    upper: Optional[Decimal]
    amount: Decimal
    tax: Decimal


@dataclass(frozen=True)
class PITResult:
    gross_income: Decimal
    relief: Decimal
    taxable: Decimal
    tax: Decimal
    breakdown: List[BandCharge] = field(default_factory=list)

    @property
    def effective_rate(self) -> Decimal:
        """Tax as a percentage of gross income."""
        if self.gross_income == 0:
            return Decimal("0.00")
        return (self.tax / self.gross_income * 100).quantize(
            KOBO, rounding=ROUND_HALF_UP
        )


@dataclass(frozen=True)
class VATInput:
    amount: Decimal
    inclusive: bool = False


@dataclass(frozen=True)
class VATResult:
    vat_amount: Decimal
    base_amount: Decimal
    total_amount: Decimal
    inclusive: bool


# =========================
# PERSONAL INCOME TAX
# =========================
def rent_relief(gross: Decimal, rent: Decimal) -> Decimal:
    """
    Lowest of 20% of gross income, the ₦500,000 cap and the rent paid.
    """
    return min(gross * RENT_RELIEF_RATE, RENT_RELIEF_CAP, rent)


def _walk_bands(taxable: Decimal):
    """
    Apply the marginal bands to taxable income.

    Returns (tax, breakdown) with unrounded amounts. Nothing is due when
    taxable income is at or below the exempt threshold.
    """
    if taxable <= PIT_EXEMPT_THRESHOLD:
        return Decimal("0"), []

    breakdown = [
        (Decimal("0"), Decimal("0"), PIT_EXEMPT_THRESHOLD, PIT_EXEMPT_THRESHOLD, Decimal("0"))
    ]
    remaining = taxable - PIT_EXEMPT_THRESHOLD
    lower = PIT_EXEMPT_THRESHOLD
    tax = Decimal("0")

    for width, rate in PERSONAL_INCOME_TAX_BANDS_2026:
        if remaining <= 0:
            break

        if width is None or remaining <= width:
            portion = remaining
        else:
            portion = width

        upper = lower + width if width is not None else None
        band_tax = portion * rate
        breakdown.append((rate, lower, upper, portion, band_tax))

        tax += band_tax
        remaining -= portion
        lower = upper

    return tax, breakdown


def calculate_pit(pit_input: PITInput) -> PITResult:
    """
    Calculate Personal Income Tax for one tax year.

    Args:
        pit_input: gross annual income and annual rent paid, in Naira

    Returns:
        PITResult with relief, taxable income and tax rounded to kobo

    Raises:
        InvalidInputError: if either amount is negative, NaN, infinite,
            above MAX_AMOUNT or not a number
    """
    gross = to_money(pit_input.gross_annual_income, "gross_annual_income")
    rent = to_money(pit_input.annual_rent_paid, "annual_rent_paid")

    relief = rent_relief(gross, rent)
    taxable = max(Decimal("0"), gross - relief)
    tax, bands = _walk_bands(taxable)

    return PITResult(
        gross_income=round_kobo(gross),
        relief=round_kobo(relief),
        taxable=round_kobo(taxable),
        tax=round_kobo(tax),
        breakdown=[
            BandCharge(
                rate=rate,
                lower=lower,
                upper=upper,
                amount=round_kobo(amount),
                tax=round_kobo(band_tax),
            )
            for rate, lower, upper, amount, band_tax in bands
        ],
    )


# =========================
# VAT
# =========================
def calculate_vat(vat_input: VATInput) -> VATResult:
    """
    Calculate 7.5% VAT on a transaction amount.

    When ``inclusive`` is true the amount already contains VAT and the
    VAT component is extracted; otherwise VAT is added on top.
    """
    amount = to_money(vat_input.amount, "amount")
    if not isinstance(vat_input.inclusive, bool):
        raise InvalidInputError("inclusive", vat_input.inclusive, "must be a boolean")

    if vat_input.inclusive:
        vat = round_kobo(amount - amount / (1 + VAT_RATE))
        total = round_kobo(amount)
        base = total - vat
    else:
        vat = round_kobo(amount * VAT_RATE)
        base = round_kobo(amount)
        total = base + vat

    # base + vat == total holds exactly on the rounded figures
    return VATResult(
        vat_amount=vat,
        base_amount=base,
        total_amount=total,
        inclusive=vat_input.inclusive,
    )
