from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase, TestCase
from rest_framework.test import APITestCase
from rest_framework import status

from account.models import User
from .models import TurnoverEntry
from .services.tax.engine import (
    InvalidInputError,
    PITInput,
    VATInput,
    calculate_pit,
    calculate_vat,
)
from .services.tax.config import MAX_AMOUNT
from .services.turnover import assess_turnover, turnover_status
from .services.deadlines import upcoming_deadlines, next_deadline


class PersonalIncomeTaxTest(SimpleTestCase):
    """Test Personal Income Tax calculation"""

    def pit(self, gross, rent=0):
        return calculate_pit(PITInput(gross_annual_income=gross, annual_rent_paid=rent))

    def test_zero_income(self):
        """Zero income is valid and owes nothing"""
        result = self.pit(0)
        self.assertEqual(result.relief, Decimal('0.00'))
        self.assertEqual(result.taxable, Decimal('0.00'))
        self.assertEqual(result.tax, Decimal('0.00'))
        self.assertEqual(result.effective_rate, Decimal('0.00'))
        self.assertEqual(result.breakdown, [])

    def test_exemption_boundary(self):
        """Exactly ₦800,000 is untaxed; one naira more is taxed at 15%"""
        self.assertEqual(self.pit(800_000).tax, Decimal('0.00'))

        result = self.pit(800_001)
        self.assertEqual(result.tax, Decimal('0.15'))

    def test_first_band_boundary(self):
        """Taxable income ending exactly on a band edge stays in the lower band"""
        self.assertEqual(self.pit(3_000_000).tax, Decimal('330000.00'))
        self.assertEqual(self.pit(3_000_001).tax, Decimal('330000.18'))

    def test_relief_statutory_cap(self):
        """₦500,000 cap binds over 20% of gross and rent paid"""
        result = self.pit(10_000_000, 10_000_000)
        self.assertEqual(result.relief, Decimal('500000.00'))
        self.assertEqual(result.taxable, Decimal('9500000.00'))
        self.assertEqual(result.tax, Decimal('1500000.00'))

    def test_relief_limited_by_rent_paid(self):
        """Relief never exceeds the rent actually paid"""
        result = self.pit(10_000_000, 100_000)
        self.assertEqual(result.relief, Decimal('100000.00'))
        self.assertEqual(result.taxable, Decimal('9900000.00'))
        self.assertEqual(result.tax, Decimal('1572000.00'))

    def test_relief_limited_by_gross_income(self):
        """Relief never exceeds 20% of gross income"""
        result = self.pit(1_000_000, 1_000_000)
        self.assertEqual(result.relief, Decimal('200000.00'))
        self.assertEqual(result.taxable, Decimal('800000.00'))
        self.assertEqual(result.tax, Decimal('0.00'))

    def test_no_rent_no_relief(self):
        self.assertEqual(self.pit(25_000_000, 0).relief, Decimal('0.00'))

    def test_full_bracket_walk(self):
        """₦50m lands exactly on the top of the 23% band"""
        result = self.pit(50_000_000)
        self.assertEqual(result.relief, Decimal('0.00'))
        self.assertEqual(result.taxable, Decimal('50000000.00'))
        self.assertEqual(result.tax, Decimal('10430000.00'))
        self.assertEqual(result.effective_rate, Decimal('20.86'))

        rates = [band.rate for band in result.breakdown]
        self.assertEqual(rates, [
            Decimal('0'), Decimal('0.15'), Decimal('0.18'), Decimal('0.21'), Decimal('0.23')
        ])
        self.assertEqual(
            [band.tax for band in result.breakdown],
            [
                Decimal('0.00'),
                Decimal('330000.00'),
                Decimal('1620000.00'),
                Decimal('2730000.00'),
                Decimal('5750000.00'),
            ]
        )
        self.assertEqual(result.breakdown[-1].upper, Decimal('50000000'))

    def test_top_band(self):
        """Income above ₦50m is taxed at 25%"""
        result = self.pit(60_000_000)
        self.assertEqual(result.tax, Decimal('12930000.00'))
        top = result.breakdown[-1]
        self.assertEqual(top.rate, Decimal('0.25'))
        self.assertIsNone(top.upper)
        self.assertEqual(top.amount, Decimal('10000000.00'))

    def test_monotonic_in_taxable_income(self):
        """Higher income never yields lower tax"""
        incomes = [
            0, 500_000, 800_000, 800_000.01, 800_001, 2_999_999.99, 3_000_000,
            7_500_000, 12_000_000, 12_000_000.01, 25_000_000, 49_999_999.99,
            50_000_000, 50_000_000.01, 120_000_000,
        ]
        taxes = [self.pit(income, 250_000).tax for income in incomes]
        self.assertEqual(taxes, sorted(taxes))

    def test_accepts_float_and_decimal(self):
        self.assertEqual(self.pit(800_001.0).tax, Decimal('0.15'))
        self.assertEqual(self.pit(Decimal('800001.00')).tax, Decimal('0.15'))

    def test_rejects_negative_income(self):
        with self.assertRaises(InvalidInputError):
            self.pit(-1)

    def test_rejects_negative_rent(self):
        with self.assertRaises(InvalidInputError):
            self.pit(1_000_000, -0.01)

    def test_rejects_non_finite(self):
        for value in [float('nan'), float('inf'), float('-inf'), Decimal('NaN'), Decimal('Infinity')]:
            with self.subTest(value=value):
                with self.assertRaises(InvalidInputError):
                    self.pit(value)

    def test_rejects_amounts_above_limit(self):
        """Huge finite amounts raise InvalidInputError, not a decimal error"""
        for value in [1e30, 1e27, 10 ** 20, Decimal('1e27'), MAX_AMOUNT + Decimal('0.01')]:
            with self.subTest(value=value):
                with self.assertRaises(InvalidInputError):
                    self.pit(value)
        with self.assertRaises(InvalidInputError):
            self.pit(1_000_000, 1e30)

    def test_largest_amount_computes(self):
        result = self.pit(MAX_AMOUNT, MAX_AMOUNT)
        self.assertEqual(result.gross_income, MAX_AMOUNT)
        self.assertEqual(result.tax, Decimal('2499999997805000.00'))
        self.assertEqual(result.relief, Decimal('500000.00'))
        self.assertEqual(result.effective_rate, Decimal('25.00'))

    def test_tiny_amounts_compute(self):
        for value in [Decimal('1e-30'), Decimal('1E-999999'), 5e-324, 0.001]:
            with self.subTest(value=value):
                result = self.pit(value, value)
                self.assertEqual(result.gross_income, Decimal('0.00'))
                self.assertEqual(result.tax, Decimal('0.00'))
                self.assertEqual(result.effective_rate, Decimal('0.00'))
                self.assertEqual(result.breakdown, [])

    def test_rejects_non_numbers(self):
        for value in ['1000000', None, True]:
            with self.subTest(value=value):
                with self.assertRaises(InvalidInputError):
                    self.pit(value)

    def test_error_names_field(self):
        with self.assertRaises(InvalidInputError) as ctx:
            self.pit(1_000_000, float('nan'))
        self.assertEqual(ctx.exception.field_name, 'annual_rent_paid')


class VATTest(SimpleTestCase):
    """Test VAT calculation"""

    def test_exclusive(self):
        """VAT is added on top of an exclusive amount"""
        result = calculate_vat(VATInput(amount=1000, inclusive=False))
        self.assertEqual(result.vat_amount, Decimal('75.00'))
        self.assertEqual(result.base_amount, Decimal('1000.00'))
        self.assertEqual(result.total_amount, Decimal('1075.00'))

    def test_inclusive(self):
        """VAT is extracted from an inclusive amount"""
        result = calculate_vat(VATInput(amount=1075, inclusive=True))
        self.assertEqual(result.vat_amount, Decimal('75.00'))
        self.assertEqual(result.base_amount, Decimal('1000.00'))
        self.assertEqual(result.total_amount, Decimal('1075.00'))

    def test_zero_amount(self):
        for inclusive in [True, False]:
            result = calculate_vat(VATInput(amount=0, inclusive=inclusive))
            self.assertEqual(result.vat_amount, Decimal('0.00'))

    def test_inclusive_vat_never_exceeds_amount(self):
        for amount in [Decimal('0.01'), Decimal('0.99'), Decimal('1'), Decimal('123456.78')]:
            with self.subTest(amount=amount):
                result = calculate_vat(VATInput(amount=amount, inclusive=True))
                self.assertGreaterEqual(result.vat_amount, Decimal('0'))
                self.assertLessEqual(result.vat_amount, amount)
                self.assertEqual(result.base_amount + result.vat_amount, result.total_amount)

    def test_round_trip(self):
        """VAT added on top is recovered when extracted from the total"""
        for amount in [Decimal('1'), Decimal('999.99'), Decimal('12345.67'), 2500000, 0.33]:
            with self.subTest(amount=amount):
                added = calculate_vat(VATInput(amount=amount, inclusive=False))
                gross = Decimal(str(amount)) * Decimal('1.075')
                extracted = calculate_vat(VATInput(amount=gross, inclusive=True))
                self.assertLessEqual(
                    abs(added.vat_amount - extracted.vat_amount), Decimal('0.01')
                )

    def test_rejects_invalid_amounts(self):
        for value in [-1, float('nan'), float('inf'), Decimal('-0.01'), '100']:
            with self.subTest(value=value):
                with self.assertRaises(InvalidInputError):
                    calculate_vat(VATInput(amount=value, inclusive=False))

    def test_rejects_amounts_above_limit(self):
        for value in [1e27, 1e30, Decimal('1e27'), MAX_AMOUNT + Decimal('0.01')]:
            for inclusive in [True, False]:
                with self.subTest(value=value, inclusive=inclusive):
                    with self.assertRaises(InvalidInputError):
                        calculate_vat(VATInput(amount=value, inclusive=inclusive))

    def test_extreme_amounts_compute(self):
        for value in [MAX_AMOUNT, Decimal('1e-30'), 5e-324]:
            for inclusive in [True, False]:
                with self.subTest(value=value, inclusive=inclusive):
                    result = calculate_vat(VATInput(amount=value, inclusive=inclusive))
                    self.assertEqual(
                        result.base_amount + result.vat_amount, result.total_amount
                    )

        result = calculate_vat(VATInput(amount=MAX_AMOUNT, inclusive=False))
        self.assertEqual(result.vat_amount, Decimal('750000000000000.00'))

    def test_rejects_non_boolean_flag(self):
        with self.assertRaises(InvalidInputError):
            calculate_vat(VATInput(amount=100, inclusive='yes'))


class TurnoverAssessmentTest(SimpleTestCase):
    """Test the ₦50m threshold assessment"""

    def test_below_threshold(self):
        status_ = assess_turnover([Decimal('5000000'), Decimal('8500000'), Decimal('3200000')])
        self.assertEqual(status_.total, Decimal('16700000'))
        self.assertEqual(status_.percentage, Decimal('33.4'))
        self.assertEqual(status_.remaining, Decimal('33300000'))
        self.assertFalse(status_.threshold_reached)
        self.assertEqual(status_.income_count, 3)

    def test_exactly_on_threshold(self):
        status_ = assess_turnover([Decimal('50000000')])
        self.assertTrue(status_.threshold_reached)
        self.assertEqual(status_.percentage, Decimal('100.0'))
        self.assertEqual(status_.remaining, Decimal('0'))

    def test_just_below_threshold(self):
        status_ = assess_turnover([Decimal('49999999.99')])
        self.assertFalse(status_.threshold_reached)
        self.assertLess(status_.percentage, Decimal('100'))

    def test_percentage_capped(self):
        status_ = assess_turnover([Decimal('40000000'), Decimal('20000000')])
        self.assertEqual(status_.percentage, Decimal('100.0'))
        self.assertEqual(status_.remaining, Decimal('0.00'))

    def test_empty(self):
        status_ = assess_turnover([])
        self.assertEqual(status_.total, Decimal('0.00'))
        self.assertEqual(status_.percentage, Decimal('0.0'))
        self.assertFalse(status_.threshold_reached)


class DeadlineTest(SimpleTestCase):
    """Test PAYE and VAT remittance deadlines"""

    def test_paye_due_today(self):
        deadline = next_deadline(date(2026, 3, 10))
        self.assertEqual(deadline.type, 'PAYE')
        self.assertEqual(deadline.date, date(2026, 3, 10))

    def test_vat_after_paye_passes(self):
        deadline = next_deadline(date(2026, 3, 11))
        self.assertEqual(deadline.type, 'VAT')
        self.assertEqual(deadline.date, date(2026, 3, 21))

    def test_vat_due_today(self):
        self.assertEqual(next_deadline(date(2026, 3, 21)).date, date(2026, 3, 21))

    def test_rolls_into_next_month(self):
        deadlines = upcoming_deadlines(date(2026, 3, 22))
        self.assertEqual(
            [(d.type, d.date) for d in deadlines],
            [('PAYE', date(2026, 4, 10)), ('VAT', date(2026, 4, 21))]
        )

    def test_rolls_into_next_year(self):
        deadline = next_deadline(date(2026, 12, 22))
        self.assertEqual(deadline.type, 'PAYE')
        self.assertEqual(deadline.date, date(2027, 1, 10))

    def test_december_mixed(self):
        deadlines = upcoming_deadlines(date(2026, 12, 15))
        self.assertEqual(
            [(d.type, d.date) for d in deadlines],
            [('VAT', date(2026, 12, 21)), ('PAYE', date(2027, 1, 10))]
        )


class TurnoverEntryModelTest(TestCase):
    """Test TurnoverEntry model and status query"""

    def setUp(self):
        self.user = User.objects.create_user(
            email='ada@example.com',
            password='testpass123'
        )

    def test_create_entry(self):
        entry = TurnoverEntry.objects.create(
            user=self.user,
            amount=Decimal('5000000.00'),
            description='Consulting Q1',
        )
        self.assertEqual(entry.entry_type, TurnoverEntry.INCOME)
        self.assertEqual(entry.date, date.today())
        self.assertTrue(entry.counts_towards_turnover)

    def test_status_excludes_gifts_and_deleted(self):
        TurnoverEntry.objects.create(
            user=self.user, amount=Decimal('5000000.00'),
            description='Consulting Q1', date=date(2026, 1, 15)
        )
        TurnoverEntry.objects.create(
            user=self.user, amount=Decimal('2000000.00'),
            description='Loan from uncle', date=date(2026, 2, 1),
            entry_type=TurnoverEntry.NON_INCOME
        )
        TurnoverEntry.objects.create(
            user=self.user, amount=Decimal('9000000.00'),
            description='Duplicate', date=date(2026, 2, 2), is_deleted=True
        )
        TurnoverEntry.objects.create(
            user=self.user, amount=Decimal('1000000.00'),
            description='Last year', date=date(2025, 12, 31)
        )

        status_2026 = turnover_status(self.user, year=2026)
        self.assertEqual(status_2026.total, Decimal('5000000.00'))
        self.assertEqual(status_2026.income_count, 1)
        self.assertEqual(status_2026.excluded_count, 1)

        self.assertEqual(turnover_status(self.user).total, Decimal('6000000.00'))


class CalculatorAPITest(APITestCase):
    """Test PIT and VAT calculator endpoints"""

    def test_pit(self):
        response = self.client.post('/api/tax/pit/', {
            'gross_annual_income': '50000000',
            'annual_rent_paid': '0'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['tax'], '10430000.00')
        self.assertEqual(response.data['taxable'], '50000000.00')
        self.assertEqual(response.data['relief'], '0.00')
        self.assertEqual(response.data['effective_rate'], '20.86')
        self.assertEqual(len(response.data['breakdown']), 5)
        self.assertIn('disclaimer', response.data)

    def test_pit_rent_defaults_to_zero(self):
        response = self.client.post('/api/tax/pit/', {
            'gross_annual_income': '800001'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['tax'], '0.15')

    def test_pit_negative_income(self):
        """Negative input is rejected, never clamped"""
        response = self.client.post('/api/tax/pit/', {
            'gross_annual_income': '-1',
            'annual_rent_paid': '0'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)
        self.assertNotIn('tax', response.data)

    def test_pit_not_a_number(self):
        response = self.client.post('/api/tax/pit/', {
            'gross_annual_income': 'abc',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('gross_annual_income', response.data)

    def test_vat_inclusive(self):
        response = self.client.post('/api/tax/vat/', {
            'amount': '1075',
            'inclusive': True
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['vat_amount'], '75.00')
        self.assertEqual(response.data['base_amount'], '1000.00')
        self.assertTrue(response.data['inclusive'])

    def test_vat_exclusive_by_default(self):
        response = self.client.post('/api/tax/vat/', {'amount': '1000'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['vat_amount'], '75.00')
        self.assertEqual(response.data['total_amount'], '1075.00')

    def test_vat_negative_amount(self):
        response = self.client.post('/api/tax/vat/', {'amount': '-5'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)

    def test_bands(self):
        response = self.client.get('/api/tax/bands/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['bands']), 6)
        self.assertIsNone(response.data['bands'][-1]['width'])
        self.assertEqual(response.data['vat_rate'], '0.075')


class TaxEstimateAPITest(APITestCase):
    """Test annual PIT estimate from recorded income"""

    def setUp(self):
        self.user = User.objects.create_user(
            email='ada@example.com',
            password='testpass123'
        )
        for amount, entry_type, entry_date in [
            ('30000000.00', TurnoverEntry.INCOME, date(2026, 2, 1)),
            ('20000000.00', TurnoverEntry.INCOME, date(2026, 7, 1)),
            ('5000000.00', TurnoverEntry.NON_INCOME, date(2026, 3, 1)),
            ('1000000.00', TurnoverEntry.INCOME, date(2025, 6, 1)),
        ]:
            TurnoverEntry.objects.create(
                user=self.user, amount=Decimal(amount),
                entry_type=entry_type, date=entry_date, description='Entry'
            )

    def test_requires_authentication(self):
        response = self.client.get('/api/tax/estimate/?year=2026')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_estimate(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.get('/api/tax/estimate/?year=2026')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_income'], '50000000.00')
        self.assertEqual(response.data['income_entries'], 2)
        self.assertEqual(response.data['pit']['tax'], '10430000.00')
        self.assertIsNone(response.data['vat_payable'])

    def test_estimate_with_rent_and_vat(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.get(
            '/api/tax/estimate/?year=2026&annual_rent_paid=10000000&vat_enabled=true'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['pit']['relief'], '500000.00')
        self.assertEqual(response.data['pit']['tax'], '10315000.00')
        self.assertEqual(response.data['vat_payable'], '3750000.00')

    def test_year_required(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.get('/api/tax/estimate/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_negative_rent(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.get('/api/tax/estimate/?year=2026&annual_rent_paid=-1')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)


class TurnoverAPITest(APITestCase):
    """Test turnover watchdog endpoints"""

    def setUp(self):
        self.user = User.objects.create_user(
            email='ada@example.com',
            password='testpass123'
        )
        self.client.force_authenticate(user=self.user)

    def test_create_entry(self):
        response = self.client.post('/api/turnover/', {
            'entry_type': 'income',
            'amount': '5000000.00',
            'description': 'Consulting Q1',
            'date': '2026-01-15'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['amount'], '5000000.00')
        entry = TurnoverEntry.objects.get(id=response.data['id'])
        self.assertEqual(entry.user, self.user)

    def test_rejects_non_positive_amount(self):
        response = self.client.post('/api/turnover/', {
            'amount': '0',
            'description': 'Nothing'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_rejects_blank_description(self):
        response = self.client.post('/api/turnover/', {
            'amount': '100.00',
            'description': '   '
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_filter_by_type(self):
        TurnoverEntry.objects.create(user=self.user, amount=Decimal('100.00'), description='Sale')
        TurnoverEntry.objects.create(
            user=self.user, amount=Decimal('50.00'), description='Gift',
            entry_type=TurnoverEntry.NON_INCOME
        )
        response = self.client.get('/api/turnover/?type=non-income')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['results']), 1)
        self.assertEqual(response.data['results'][0]['entry_type'], 'non-income')

    def test_filter_by_date_range(self):
        TurnoverEntry.objects.create(
            user=self.user, amount=Decimal('100.00'), description='January',
            date=date(2026, 1, 10)
        )
        TurnoverEntry.objects.create(
            user=self.user, amount=Decimal('200.00'), description='March',
            date=date(2026, 3, 10)
        )
        response = self.client.get('/api/turnover/?start_date=2026-02-01&end_date=2026-03-31')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['results']), 1)
        self.assertEqual(response.data['results'][0]['description'], 'March')

    def test_invalid_date_filter(self):
        """Malformed date filters are rejected instead of ignored"""
        TurnoverEntry.objects.create(user=self.user, amount=Decimal('100.00'), description='Sale')
        for query in ['start_date=2026-13-45', 'end_date=2026-02-30', 'start_date=yesterday']:
            with self.subTest(query=query):
                response = self.client.get(f'/api/turnover/?{query}')
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertIn('error', response.data)

    def test_reversed_date_range(self):
        response = self.client.get('/api/turnover/?start_date=2026-03-01&end_date=2026-01-01')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_soft_delete(self):
        entry = TurnoverEntry.objects.create(
            user=self.user, amount=Decimal('100.00'), description='Sale'
        )
        response = self.client.delete(f'/api/turnover/{entry.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

        response = self.client.get('/api/turnover/')
        self.assertEqual(len(response.data['results']), 0)

        entry.refresh_from_db()
        self.assertTrue(entry.is_deleted)

    def test_user_isolation(self):
        other_user = User.objects.create_user(
            email='other@example.com',
            password='otherpass123'
        )
        other_entry = TurnoverEntry.objects.create(
            user=other_user, amount=Decimal('1000.00'), description='Other'
        )

        response = self.client.get('/api/turnover/')
        self.assertEqual(len(response.data['results']), 0)

        response = self.client.get(f'/api/turnover/{other_entry.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_status(self):
        TurnoverEntry.objects.create(
            user=self.user, amount=Decimal('45000000.00'),
            description='Contract', date=date(2026, 5, 1)
        )
        TurnoverEntry.objects.create(
            user=self.user, amount=Decimal('10000000.00'), description='Loan',
            date=date(2026, 5, 2), entry_type=TurnoverEntry.NON_INCOME
        )
        response = self.client.get('/api/turnover/status/?year=2026')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total'], '45000000.00')
        self.assertEqual(response.data['percentage'], '90.0')
        self.assertFalse(response.data['threshold_reached'])
        self.assertEqual(response.data['excluded_count'], 1)

    def test_status_invalid_year(self):
        response = self.client.get('/api/turnover/status/?year=twenty')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class DashboardAPITest(APITestCase):
    """Test dashboard and deadline endpoints"""

    def setUp(self):
        self.user = User.objects.create_user(
            email='ada@example.com',
            password='testpass123'
        )
        self.client.force_authenticate(user=self.user)

    def test_dashboard_refreshes_after_new_entry(self):
        TurnoverEntry.objects.create(
            user=self.user, amount=Decimal('1000.00'), description='Sale'
        )
        response = self.client.get('/api/dashboard/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['turnover']['total'], '1000.00')
        self.assertIn('next_deadline', response.data)

        TurnoverEntry.objects.create(
            user=self.user, amount=Decimal('500.00'), description='Sale'
        )
        response = self.client.get('/api/dashboard/')
        self.assertEqual(response.data['turnover']['total'], '1500.00')

    def test_deadlines(self):
        self.client.force_authenticate(user=None)
        response = self.client.get('/api/deadlines/?date=2026-12-22')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['next']['type'], 'PAYE')
        self.assertEqual(response.data['next']['date'], '2027-01-10')
        self.assertEqual(len(response.data['upcoming']), 2)

    def test_deadlines_invalid_date(self):
        response = self.client.get('/api/deadlines/?date=2026-02-30')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
