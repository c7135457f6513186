import uuid
from datetime import date
from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal

from account.models import User


class TurnoverEntry(models.Model):
    """
    Turnover entry - business income or a gift/loan
    Only income entries count towards the ₦50m threshold
    """
    INCOME = 'income'
    NON_INCOME = 'non-income'

    ENTRY_TYPES = [
        (INCOME, 'Business Income (Taxable)'),
        (NON_INCOME, 'Gift / Loan / Support'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='turnover_entries')
    entry_type = models.CharField(max_length=20, choices=ENTRY_TYPES, default=INCOME)
    amount = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    description = models.CharField(max_length=255)
    date = models.DateField(default=date.today)
    is_deleted = models.BooleanField(default=False)  # Soft delete
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-date', '-created_at']
        verbose_name_plural = 'Turnover entries'
        indexes = [
            models.Index(fields=['user', 'date'], name='turnover_user_date_idx'),
            models.Index(fields=['user', 'is_deleted'], name='turnover_user_deleted_idx'),
            models.Index(fields=['entry_type'], name='turnover_entry_type_idx'),
        ]

    def __str__(self):
        return f"{self.get_entry_type_display()} - {self.date} - {self.amount}"

    @property
    def counts_towards_turnover(self):
        return self.entry_type == self.INCOME
