import logging
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from datetime import date
from django.utils.dateparse import parse_date
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter, OpenApiExample
from drf_spectacular.types import OpenApiTypes
from .models import TurnoverEntry
from .serializers import (
    PITInputSerializer,
    PITResultSerializer,
    VATInputSerializer,
    VATResultSerializer,
    TaxEstimateSerializer,
    TaxEstimateQuerySerializer,
    TurnoverEntrySerializer,
    TurnoverStatusSerializer,
)
from .services.turnover import turnover_status, income_total
from .services.tax.engine import (
    InvalidInputError,
    PITInput,
    VATInput,
    calculate_pit,
    calculate_vat,
)
from .services.tax.config import (
    PIT_EXEMPT_THRESHOLD,
    PERSONAL_INCOME_TAX_BANDS_2026,
    RENT_RELIEF_RATE,
    RENT_RELIEF_CAP,
    VAT_RATE,
    TAX_YEAR,
    TAX_DISCLAIMER,
)

logger = logging.getLogger(__name__)


def parse_query_date(value):
    """Parse an optional YYYY-MM-DD query value, raising ValueError if malformed"""
    if not value:
        return None
    parsed = parse_date(value)
    if parsed is None:
        raise ValueError(f"Invalid date: {value}")
    return parsed


def invalid_input_response(error):
    logger.warning(f"Rejected tax calculation input: {error}")
    return Response({'error': str(error)}, status=status.HTTP_400_BAD_REQUEST)


@extend_schema_view(
    list=extend_schema(
        summary="Tax calculation endpoints",
        description="Access Nigerian PIT and VAT calculators based on Nigeria Tax Act 2025.",
        tags=["Tax"]
    )
)
class TaxViewSet(viewsets.ViewSet):
    """
    ViewSet for Nigerian tax calculations.

    The calculators are open to anonymous users; the annual estimate
    reads the authenticated user's recorded income.
    """
    permission_classes = [AllowAny]

    def get_permissions(self):
        if self.action == 'estimate':
            return [IsAuthenticated()]
        return super().get_permissions()

    def list(self, request):
        return Response({
            'pit': request.build_absolute_uri('pit/'),
            'vat': request.build_absolute_uri('vat/'),
            'bands': request.build_absolute_uri('bands/'),
            'estimate': request.build_absolute_uri('estimate/'),
        })

    @extend_schema(
        summary="Calculate Personal Income Tax",
        description=(
            "Calculate rent relief, taxable income and PIT for one year. "
            "All amounts in Naira (NGN)."
        ),
        request=PITInputSerializer,
        responses={200: PITResultSerializer},
        examples=[
            OpenApiExample(
                'PIT Example',
                value={'gross_annual_income': '10000000.00', 'annual_rent_paid': '1200000.00'},
                request_only=True
            )
        ],
        tags=["Tax"]
    )
    @action(detail=False, methods=['post'])
    def pit(self, request):
        """
        POST /api/tax/pit/
        """
        serializer = PITInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = calculate_pit(PITInput(**serializer.validated_data))
        except InvalidInputError as e:
            return invalid_input_response(e)

        return Response(PITResultSerializer(result).data)

    @extend_schema(
        summary="Calculate VAT",
        description=(
            "Calculate 7.5% VAT. When 'inclusive' is true the VAT component is "
            "extracted from the amount, otherwise it is added on top."
        ),
        request=VATInputSerializer,
        responses={200: VATResultSerializer},
        examples=[
            OpenApiExample(
                'VAT Example',
                value={'amount': '107500.00', 'inclusive': True},
                request_only=True
            )
        ],
        tags=["Tax"]
    )
    @action(detail=False, methods=['post'])
    def vat(self, request):
        """
        POST /api/tax/vat/
        """
        serializer = VATInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = calculate_vat(VATInput(**serializer.validated_data))
        except InvalidInputError as e:
            return invalid_input_response(e)

        return Response(VATResultSerializer(result).data)

    @extend_schema(
        summary="Get tax bands",
        description="Statutory PIT bands, rent relief rules and VAT rate used by the calculators.",
        tags=["Tax"]
    )
    @action(detail=False, methods=['get'])
    def bands(self, request):
        """
        GET /api/tax/bands/
        """
        bands = [{'width': str(PIT_EXEMPT_THRESHOLD), 'rate': '0.00'}]
        for width, rate in PERSONAL_INCOME_TAX_BANDS_2026:
            bands.append({
                'width': str(width) if width is not None else None,
                'rate': str(rate),
            })

        return Response({
            'tax_year': TAX_YEAR,
            'exempt_threshold': str(PIT_EXEMPT_THRESHOLD),
            'bands': bands,
            'rent_relief': {
                'rate': str(RENT_RELIEF_RATE),
                'cap': str(RENT_RELIEF_CAP),
            },
            'vat_rate': str(VAT_RATE),
            'disclaimer': TAX_DISCLAIMER,
        })

    @extend_schema(
        summary="Estimate annual PIT from recorded income",
        description=(
            "Treat the authenticated user's recorded business income for a year "
            "as gross income and estimate PIT, with optional VAT. "
            "Gifts and loans are excluded."
        ),
        parameters=[
            OpenApiParameter(
                name='year',
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=True,
                description='Tax year (e.g., 2026)'
            ),
            OpenApiParameter(
                name='annual_rent_paid',
                type=OpenApiTypes.DECIMAL,
                location=OpenApiParameter.QUERY,
                required=False,
                description='Rent paid in the year, used for relief - default: 0'
            ),
            OpenApiParameter(
                name='vat_enabled',
                type=OpenApiTypes.BOOL,
                location=OpenApiParameter.QUERY,
                required=False,
                description='Enable VAT calculation (7.5%) - default: false'
            ),
        ],
        responses={200: TaxEstimateSerializer},
        tags=["Tax"]
    )
    @action(detail=False, methods=['get'])
    def estimate(self, request):
        """
        GET /api/tax/estimate/?year=2026&annual_rent_paid=600000&vat_enabled=true
        """
        query = TaxEstimateQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

        year = query.validated_data['year']
        rent = query.validated_data['annual_rent_paid']
        vat_enabled = query.validated_data['vat_enabled']
        start_date = date(year, 1, 1)
        end_date = date(year, 12, 31)

        total, count = income_total(request.user, start_date, end_date)

        try:
            pit = calculate_pit(PITInput(gross_annual_income=total, annual_rent_paid=rent))
            vat = calculate_vat(VATInput(amount=total)) if vat_enabled else None
        except InvalidInputError as e:
            return invalid_input_response(e)

        serializer = TaxEstimateSerializer({
            'tax_year': year,
            'period_start': start_date,
            'period_end': end_date,
            'total_income': total,
            'income_entries': count,
            'annual_rent_paid': rent,
            'pit': pit,
            'vat_payable': vat.vat_amount if vat else None,
        })
        return Response(serializer.data)


@extend_schema_view(
    list=extend_schema(
        summary="List turnover entries",
        description="Get a paginated list of turnover entries with filtering options.",
        tags=["Turnover"],
        parameters=[
            OpenApiParameter(
                name='type',
                type=OpenApiTypes.STR,
                enum=['income', 'non-income'],
                description='Filter by entry type'
            ),
            OpenApiParameter(
                name='start_date',
                type=OpenApiTypes.DATE,
                description='Filter entries from this date (YYYY-MM-DD)'
            ),
            OpenApiParameter(
                name='end_date',
                type=OpenApiTypes.DATE,
                description='Filter entries until this date (YYYY-MM-DD)'
            ),
        ]
    ),
    create=extend_schema(
        summary="Record turnover entry",
        description="Record business income, or a gift/loan that does not count towards turnover.",
        tags=["Turnover"],
        examples=[
            OpenApiExample(
                'Turnover Entry Example',
                value={
                    'entry_type': 'income',
                    'amount': '5000000.00',
                    'description': 'Consulting Q1',
                    'date': '2026-01-15'
                },
                request_only=True
            )
        ]
    ),
    retrieve=extend_schema(
        summary="Get turnover entry",
        tags=["Turnover"]
    ),
    update=extend_schema(
        summary="Update turnover entry",
        tags=["Turnover"]
    ),
    partial_update=extend_schema(
        summary="Partial update turnover entry",
        tags=["Turnover"]
    ),
    destroy=extend_schema(
        summary="Delete turnover entry (soft delete)",
        description="Soft delete an entry. It will be marked as deleted but not removed from database.",
        tags=["Turnover"]
    ),
)
class TurnoverEntryViewSet(viewsets.ModelViewSet):
    """
    ViewSet for the ₦50m turnover watchdog ledger
    Users can only access their own entries
    """
    serializer_class = TurnoverEntrySerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        """
        Filter entries to only those owned by the authenticated user
        Exclude soft-deleted entries
        """
        queryset = TurnoverEntry.objects.filter(
            user=self.request.user,
            is_deleted=False
        )

        entry_type = self.request.query_params.get('type', None)
        if entry_type in [TurnoverEntry.INCOME, TurnoverEntry.NON_INCOME]:
            queryset = queryset.filter(entry_type=entry_type)

        # date filters are validated in list
        if self.action == 'list':
            start_date = parse_query_date(self.request.query_params.get('start_date'))
            end_date = parse_query_date(self.request.query_params.get('end_date'))

            if start_date:
                queryset = queryset.filter(date__gte=start_date)
            if end_date:
                queryset = queryset.filter(date__lte=end_date)

        return queryset

    def list(self, request, *args, **kwargs):
        try:
            start_date = parse_query_date(request.query_params.get('start_date'))
            end_date = parse_query_date(request.query_params.get('end_date'))
        except ValueError:
            return Response(
                {'error': 'Invalid date format. Use YYYY-MM-DD'},
                status=status.HTTP_400_BAD_REQUEST
            )

        if start_date and end_date and start_date > end_date:
            return Response(
                {'error': 'start_date must be before or equal to end_date'},
                status=status.HTTP_400_BAD_REQUEST
            )

        return super().list(request, *args, **kwargs)

    def perform_create(self, serializer):
        entry = serializer.save()
        logger.info(f"Turnover entry {entry.id} recorded for {self.request.user.email}")

    def perform_destroy(self, instance):
        """
        Soft delete - set is_deleted to True instead of actually deleting
        """
        instance.is_deleted = True
        instance.save()
        logger.info(f"Turnover entry {instance.id} deleted for {self.request.user.email}")

    @extend_schema(
        summary="Get turnover status",
        description=(
            "Total business income against the ₦50m small company threshold. "
            "Gifts and loans are excluded."
        ),
        parameters=[
            OpenApiParameter(
                name='year',
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description='Calendar year to assess - default: all entries'
            ),
        ],
        responses={200: TurnoverStatusSerializer},
        tags=["Turnover"]
    )
    @action(detail=False, methods=['get'], url_path='status')
    def threshold_status(self, request):
        """
        GET /api/turnover/status/?year=2026
        """
        year = request.query_params.get('year')
        if year is not None:
            try:
                year = int(year)
                date(year, 1, 1)
            except ValueError:
                return Response(
                    {'error': 'Invalid year format. Use YYYY'},
                    status=status.HTTP_400_BAD_REQUEST
                )

        serializer = TurnoverStatusSerializer(turnover_status(request.user, year=year))
        return Response(serializer.data)
