import datetime
import django.core.validators
import django.db.models.deletion
import uuid
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='TurnoverEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('entry_type', models.CharField(choices=[('income', 'Business Income (Taxable)'), ('non-income', 'Gift / Loan / Support')], default='income', max_length=20)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=15, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('description', models.CharField(max_length=255)),
                ('date', models.DateField(default=datetime.date.today)),
                ('is_deleted', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='turnover_entries', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name_plural': 'Turnover entries',
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'date'], name='turnover_user_date_idx'),
                    models.Index(fields=['user', 'is_deleted'], name='turnover_user_deleted_idx'),
                    models.Index(fields=['entry_type'], name='turnover_entry_type_idx'),
                ],
            },
        ),
    ]
