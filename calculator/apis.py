from datetime import date
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.views import APIView
from django.core.cache import cache
from django.utils.dateparse import parse_date
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .serializers import DeadlineSerializer, TurnoverStatusSerializer
from .services.deadlines import upcoming_deadlines, next_deadline
from .services.turnover import turnover_status


def get_user_cache_version(user_id):
    """
    Get the current cache version for a user, initializing it if it doesn't exist.
    """
    version_key = f'user_cache_version:{user_id}'
    version = cache.get(version_key)
    if version is None:
        version = 1
        cache.set(version_key, version, timeout=None)
    return version


class DashboardView(APIView):
    """
    Year-to-date turnover against the ₦50m threshold and the next
    remittance deadline. Cached per user until their entries change.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get dashboard overview",
        description="Current year turnover status and the next PAYE/VAT deadline. Cached for 5 minutes.",
        tags=["Dashboard"],
        responses={
            200: {
                'type': 'object',
                'properties': {
                    'year': {'type': 'integer'},
                    'turnover': {'type': 'object'},
                    'next_deadline': {'type': 'object'},
                }
            }
        }
    )
    def get(self, request):
        user = request.user
        today = date.today()
        version = get_user_cache_version(user.id)
        cache_key = f'dashboard:{user.id}:v{version}:{today.isoformat()}'
        cached_data = cache.get(cache_key)
        if cached_data:
            return Response(cached_data)

        data = {
            "year": today.year,
            "turnover": TurnoverStatusSerializer(turnover_status(user, year=today.year)).data,
            "next_deadline": DeadlineSerializer(next_deadline(today)).data,
        }
        cache.set(cache_key, data, timeout=300)
        return Response(data)


class DeadlinesView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Get upcoming remittance deadlines",
        description="Next PAYE (10th) and VAT (21st) deadlines, soonest first.",
        tags=["Dashboard"],
        parameters=[
            OpenApiParameter(
                name='date',
                type=OpenApiTypes.DATE,
                description='Reference date (YYYY-MM-DD) - default: today'
            ),
        ],
    )
    def get(self, request):
        date_str = request.query_params.get('date')
        today = date.today()
        if date_str:
            try:
                today = parse_date(date_str)
            except ValueError:
                today = None
            if not today:
                return Response(
                    {"error": "Invalid date format. Use YYYY-MM-DD"},
                    status=status.HTTP_400_BAD_REQUEST
                )

        deadlines = upcoming_deadlines(today)
        return Response({
            "next": DeadlineSerializer(deadlines[0]).data,
            "upcoming": DeadlineSerializer(deadlines, many=True).data,
        })
