"""
Tax configuration for Nigeria Tax Act 2025 (effective January 1, 2026).

Acts signed into law: June 26, 2025
Effective date: January 1, 2026

Target:
- Individuals checking their Personal Income Tax (PIT)
- Small businesses tracking turnover and VAT

Key Rules (2026):
- First ₦800,000 of taxable income is EXEMPT, but only once taxable
  income is above ₦800,000 (at or below it, no PIT is due at all)
- Rent relief: lower of 20% of gross income, ₦500,000 or rent actually paid
- Progressive PIT regime with top marginal rate of 25%
- VAT at a flat 7.5%
- Companies with turnover of ₦50m or less are small companies (0% CIT)

IMPORTANT:
- PIT bands below are WIDTHS applied to CHARGEABLE income
  (i.e. taxable income AFTER removing the ₦800,000 exempt band)
"""

from decimal import Decimal

# =========================
# MONEY
# =========================
KOBO = Decimal("0.01")

# Largest amount the engine accepts (16 whole digits plus kobo). Keeps every
# intermediate within the default 28-digit Decimal context.
MAX_AMOUNT = Decimal("9999999999999999.99")


# =========================
# RENT RELIEF
# =========================
RENT_RELIEF_RATE = Decimal("0.20")  # 20% of gross income
RENT_RELIEF_CAP = Decimal("500000")  # ₦500,000


# =========================
# PIT EXEMPTION THRESHOLD
# =========================
PIT_EXEMPT_THRESHOLD = Decimal("800000")  # ₦800,000


# =========================
# PERSONAL INCOME TAX BANDS (2026)
# =========================
# Consumed in order against CHARGEABLE income.
# A width of None means the band is unbounded.

PERSONAL_INCOME_TAX_BANDS_2026 = [
    # (band_width_ngn, marginal_rate)
    (Decimal("2200000"), Decimal("0.15")),   # Next ₦2.2m @ 15%
    (Decimal("9000000"), Decimal("0.18")),   # Next ₦9m @ 18%
    (Decimal("13000000"), Decimal("0.21")),  # Next ₦13m @ 21%
    (Decimal("25000000"), Decimal("0.23")),  # Next ₦25m @ 23%
    (None, Decimal("0.25")),                 # Above ₦50m @ 25%
]


# =========================
# VAT
# =========================
VAT_RATE = Decimal("0.075")  # 7.5%


# =========================
# TURNOVER WATCHDOG
# =========================
SMALL_COMPANY_TURNOVER_THRESHOLD = Decimal("50000000")  # ₦50,000,000


# =========================
# REMITTANCE CALENDAR
# =========================
PAYE_REMITTANCE_DAY = 10
VAT_REMITTANCE_DAY = 21


# =========================
# METADATA
# =========================
TAX_YEAR = 2026

TAX_DISCLAIMER = (
    "These are estimates only and do not constitute official tax filing with FIRS "
    "(Federal Inland Revenue Service). Consult a licensed tax professional for "
    "accurate tax computation and filing."
)
