"""
Turnover watchdog services.

Tracks a user's business turnover against the ₦50m small company threshold.
Only 'income' entries count; genuine gifts/loans ('non-income') are recorded
but excluded from turnover.
All queries are filtered by authenticated user for data isolation.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_DOWN
from typing import Iterable, Optional

from django.db.models import Sum, Count

from calculator.models import TurnoverEntry
from .tax.config import SMALL_COMPANY_TURNOVER_THRESHOLD


@dataclass(frozen=True)
class TurnoverStatus:
    total: Decimal
    threshold: Decimal
    remaining: Decimal
    percentage: Decimal
    threshold_reached: bool
    income_count: int
    excluded_count: int


def assess_turnover(
    income_amounts: Iterable[Decimal],
    excluded_count: int = 0,
    threshold: Decimal = SMALL_COMPANY_TURNOVER_THRESHOLD,
) -> TurnoverStatus:
    """
    Compare total income turnover with the small company threshold.

    Percentage is capped at 100 and truncated to one decimal place, so it
    only reads 100.0 once turnover is equal to or above the threshold.
    """
    amounts = list(income_amounts)
    total = sum(amounts, Decimal("0.00"))

    percentage = min(total / threshold * 100, Decimal("100"))
    percentage = percentage.quantize(Decimal("0.1"), rounding=ROUND_DOWN)

    return TurnoverStatus(
        total=total,
        threshold=threshold,
        remaining=max(Decimal("0.00"), threshold - total),
        percentage=percentage,
        threshold_reached=total >= threshold,
        income_count=len(amounts),
        excluded_count=excluded_count,
    )


def turnover_status(user, year: Optional[int] = None) -> TurnoverStatus:
    """
    Build the watchdog status for a user from their recorded entries.

    Args:
        user: Authenticated user
        year: Optional calendar year; all entries are used when omitted
    """
    queryset = TurnoverEntry.objects.filter(user=user, is_deleted=False)
    if year is not None:
        queryset = queryset.filter(date__gte=date(year, 1, 1), date__lte=date(year, 12, 31))

    income = queryset.filter(entry_type=TurnoverEntry.INCOME).values_list('amount', flat=True)
    excluded = queryset.exclude(entry_type=TurnoverEntry.INCOME).count()

    return assess_turnover(income, excluded_count=excluded)


def income_total(user, start_date: date, end_date: date):
    """
    Total income turnover and entry count for a date range (inclusive).
    """
    totals = TurnoverEntry.objects.filter(
        user=user,
        is_deleted=False,
        entry_type=TurnoverEntry.INCOME,
        date__gte=start_date,
        date__lte=end_date,
    ).aggregate(total=Sum('amount'), count=Count('id'))

    return totals['total'] or Decimal('0.00'), totals['count']
