from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema

from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    ProfileUpdateSerializer,
    UserSerializer,
    CurrentUserSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    update_profile,
    EmailTakenError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidProfileError,
)


class TokenPairSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class SessionSerializer(serializers.Serializer):
    user = CurrentUserSerializer()
    tokens = TokenPairSerializer()


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()


def session_response(user, status_code=status.HTTP_200_OK):
    """Profile with memberships and a fresh JWT pair."""
    refresh = RefreshToken.for_user(user)
    return Response({
        'user': CurrentUserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        },
    }, status=status_code)


@extend_schema(
    request=UserRegistrationSerializer,
    responses={201: SessionSerializer, 400: ErrorSerializer},
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Create an account and sign in."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        user = register_user(
            email=data['email'],
            password=data['password'],
            full_name=data['full_name'],
            phone=data.get('phone', ''),
        )
    except EmailTakenError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return session_response(user, status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={200: SessionSerializer, 401: ErrorSerializer, 403: ErrorSerializer},
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = authenticate_user(**serializer.validated_data)
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return session_response(user)


@extend_schema(methods=['GET'], responses={200: CurrentUserSerializer}, tags=['auth'])
@extend_schema(
    methods=['PATCH'],
    request=ProfileUpdateSerializer,
    responses={200: UserSerializer, 400: ErrorSerializer},
    tags=['auth'],
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def current_user(request):
    """GET: profile with company memberships. PATCH: change name or phone."""
    if request.method == 'GET':
        return Response(CurrentUserSerializer(request.user).data)

    serializer = ProfileUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = update_profile(user=request.user, **serializer.validated_data)
    except InvalidProfileError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(UserSerializer(user).data)
