import logging
from django.db import transaction, DatabaseError

from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiExample

from .serializers import UserRegistrationSerializer, UserSerializer

# prepare logging handler for this file
logger = logging.getLogger(__name__)


@extend_schema(
    summary="Register new user",
    description="Register a new user account. Returns user details and JWT tokens.",
    tags=["auth"],
    request=UserRegistrationSerializer,
    examples=[
        OpenApiExample(
            'User Registration',
            value={
                'email': 'ada@example.com',
                'password': 'SecurePass123',
                'password_confirm': 'SecurePass123',
                'first_name': 'Ada',
                'last_name': 'Obi',
            },
            request_only=True
        )
    ],
    responses={
        201: {
            'type': 'object',
            'properties': {
                'status': {'type': 'string'},
                'user': {
                    'type': 'object',
                    'properties': {
                        'id': {'type': 'string'},
                        'username': {'type': 'string'},
                        'email': {'type': 'string'},
                        'first_name': {'type': 'string'},
                        'last_name': {'type': 'string'}
                    }
                },
                'tokens': {
                    'type': 'object',
                    'properties': {
                        'access': {'type': 'string'},
                        'refresh': {'type': 'string'}
                    }
                }
            }
        },
        400: {'description': 'Validation error'}
    }
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """
    Register a new user

    POST /api/auth/register/
    {
        "email": "ada@example.com",
        "password": "SecurePass123",
        "password_confirm": "SecurePass123",
        "first_name": "Ada",
        "last_name": "Obi"
    }
    """
    serializer = UserRegistrationSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        with transaction.atomic():
            user = serializer.save()
    except DatabaseError as e:
        logger.error(f"Failed to create user account. error {e}")
        return Response({
            'status': 'error',
            'detail': 'Registration failed. Please try again.'
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    refresh = RefreshToken.for_user(user)
    logger.info(f"Account for {user.email} has been created successfully")

    return Response({
        'status': 'success',
        'user': UserSerializer(user).data,
        'tokens': {
            'access': str(refresh.access_token),
            'refresh': str(refresh)
        }
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    summary="Get or update profile",
    description="Retrieve or update the authenticated user's name.",
    tags=["auth"],
    request=UserSerializer,
    responses={200: UserSerializer},
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def profile(request):
    """
    GET /api/auth/profile/
    PATCH /api/auth/profile/
    """
    if request.method == 'GET':
        return Response(UserSerializer(request.user).data)

    serializer = UserSerializer(request.user, data=request.data, partial=True)
    if serializer.is_valid():
        serializer.save()
        return Response(serializer.data)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
