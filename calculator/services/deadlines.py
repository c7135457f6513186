"""
Monthly remittance deadlines.

PAYE is remitted by the 10th and VAT is filed and paid by the 21st of the
month following the transactions.
"""
from dataclasses import dataclass
from datetime import date
from typing import List

from .tax.config import PAYE_REMITTANCE_DAY, VAT_REMITTANCE_DAY


@dataclass(frozen=True)
class Deadline:
    date: date
    title: str
    description: str
    type: str


DEADLINE_TYPES = [
    (
        'PAYE',
        PAYE_REMITTANCE_DAY,
        'PAYE Remittance',
        'Deadline to remit Pay As You Earn (PAYE) taxes.',
    ),
    (
        'VAT',
        VAT_REMITTANCE_DAY,
        'VAT Remittance',
        'Deadline to file and pay Value Added Tax (VAT).',
    ),
]


def _roll_forward(today: date, day: int) -> date:
    """This month's due date, or next month's if it has already passed."""
    due = today.replace(day=day)
    if today > due:
        if today.month == 12:
            due = date(today.year + 1, 1, day)
        else:
            due = date(today.year, today.month + 1, day)
    return due


def upcoming_deadlines(today: date) -> List[Deadline]:
    """
    Next occurrence of each monthly deadline, soonest first.

    A deadline falling on ``today`` is still upcoming.
    """
    deadlines = [
        Deadline(
            date=_roll_forward(today, day),
            title=title,
            description=description,
            type=deadline_type,
        )
        for deadline_type, day, title, description in DEADLINE_TYPES
    ]
    return sorted(deadlines, key=lambda d: d.date)


def next_deadline(today: date) -> Deadline:
    return upcoming_deadlines(today)[0]
