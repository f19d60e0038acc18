from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import generics, serializers, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from apps.messes.session import build_session

from .models import User
from .serializers import (
    ProfileUpdateSerializer,
    SessionSerializer,
    UserLoginSerializer,
    UserPublicSerializer,
    UserRegistrationSerializer,
    UserSerializer,
    VerifyEmailSerializer,
)
from .services import (
    InactiveAccountError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserRegistrationError,
    authenticate_user,
    register_user,
    update_profile as update_profile_service,
    verify_user_email,
)

ErrorBody = inline_serializer('AccountsError', {'error': serializers.CharField()})
MessageBody = inline_serializer('AccountsMessage', {'message': serializers.CharField()})
AuthBody = inline_serializer('AuthResult', {
    'message': serializers.CharField(),
    'user': UserSerializer(),
    'tokens': inline_serializer('TokenPair', {
        'access': serializers.CharField(),
        'refresh': serializers.CharField(),
    }),
})


def _signed_in(user, message, code=status.HTTP_200_OK):
    refresh = RefreshToken.for_user(user)
    return Response({
        'message': message,
        'user': UserSerializer(user).data,
        'tokens': {'access': str(refresh.access_token), 'refresh': str(refresh)},
    }, status=code)


def _error(message, code):
    return Response({'error': message}, status=code)


@extend_schema(
    request=UserRegistrationSerializer,
    responses={201: AuthBody, 400: ErrorBody},
    description="Create an account. The new user belongs to no mess until onboarding.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    fields = {k: v for k, v in serializer.validated_data.items() if k != 'password_confirm'}

    try:
        user = register_user(**fields)
    except UserRegistrationError as e:
        return _error(str(e), status.HTTP_400_BAD_REQUEST)

    return _signed_in(user, 'Account created. Check your inbox to confirm your email.',
                      status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={200: AuthBody, 400: ErrorBody, 401: ErrorBody, 403: ErrorBody},
    description="Exchange email and password for a JWT pair.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = authenticate_user(**serializer.validated_data)
    except InvalidCredentialsError:
        return _error('Invalid credentials', status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return _error(str(e), status.HTTP_403_FORBIDDEN)

    return _signed_in(user, 'Signed in')


@extend_schema(
    request=inline_serializer('LogoutRequest', {'refresh': serializers.CharField(required=False)}),
    responses={200: MessageBody, 400: ErrorBody},
    description="Sign out. Tokens are stateless, so the client drops them; "
                "a supplied refresh token is checked for validity.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    token = request.data.get('refresh')
    if token:
        try:
            RefreshToken(token)
        except TokenError:
            return _error('Invalid token', status.HTTP_400_BAD_REQUEST)
    return Response({'message': 'Logged out'})


@extend_schema(
    responses={200: inline_serializer('CurrentUser', {
        'user': UserSerializer(),
        'session': SessionSerializer(),
    })},
    description="The caller's account together with their mess session (role and mess code).",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    return Response({
        'user': UserSerializer(request.user).data,
        'session': SessionSerializer(build_session(request.user)).data,
    })


@extend_schema(
    request=ProfileUpdateSerializer,
    responses={200: UserSerializer, 400: ErrorBody},
    description="Change display name and/or phone.",
    tags=['auth'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def update_profile(request):
    serializer = ProfileUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = update_profile_service(user=request.user, **serializer.validated_data)
    return Response(UserSerializer(user).data)


@extend_schema(
    request=VerifyEmailSerializer,
    responses={200: MessageBody, 400: ErrorBody},
    description="Confirm the caller's email with the token sent at sign-up.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def verify_email(request):
    serializer = VerifyEmailSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        verify_user_email(user_id=request.user.id, token=serializer.validated_data['token'])
    except InvalidTokenError as e:
        return _error(str(e), status.HTTP_400_BAD_REQUEST)

    return Response({'message': 'Email confirmed'})


@extend_schema(tags=['auth'])
class UserDetailView(generics.RetrieveAPIView):
    """Public profile of an active account."""

    queryset = User.objects.filter(is_active=True)
    serializer_class = UserPublicSerializer
    permission_classes = [IsAuthenticated]
