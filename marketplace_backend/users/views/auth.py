from django.contrib.auth import authenticate
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from backend.exception_handler import error_response
from users.serializers import (
    CheckEmailSerializer,
    LoginResponseSerializer,
    LoginSerializer,
    RegisterArtisanSerializer,
    RegisterSerializer,
    UserSerializer,
)
from users.services.registration import email_taken, register_artisan, register_customer


def _token_pair(user) -> dict:
    refresh = RefreshToken.for_user(user)
    return {"access": str(refresh.access_token), "refresh": str(refresh)}


# ---------------------------
# THROTTLES (TARGETED)
# ---------------------------


class RegisterAnonThrottle(AnonRateThrottle):
    """Sign-up and email probing. Rate: DEFAULT_THROTTLE_RATES['auth']."""

    scope = "auth"


class LoginAnonThrottle(AnonRateThrottle):
    """Password guessing. Rate: DEFAULT_THROTTLE_RATES['auth']."""

    scope = "auth"


# ---------------------------
# VIEWS
# ---------------------------


class RegisterView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [RegisterAnonThrottle]
    serializer_class = RegisterSerializer

    @extend_schema(
        request=RegisterSerializer,
        responses={
            201: UserSerializer,
            409: OpenApiResponse(description="Email already registered"),
        },
        description="Register a new customer account",
        tags=["Auth"],
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = register_customer(**serializer.validated_data)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class RegisterArtisanView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [RegisterAnonThrottle]
    serializer_class = RegisterArtisanSerializer

    @extend_schema(
        request=RegisterArtisanSerializer,
        responses={
            201: UserSerializer,
            409: OpenApiResponse(description="Email already registered"),
        },
        description="Register an artisan account together with its artisan profile",
        tags=["Auth"],
    )
    def post(self, request):
        serializer = RegisterArtisanSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user, profile = register_artisan(**serializer.validated_data)

        data = UserSerializer(user).data
        data["artisan_profile_id"] = profile.id
        return Response(data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [LoginAnonThrottle]
    serializer_class = LoginSerializer

    @extend_schema(
        request=LoginSerializer,
        responses={200: LoginResponseSerializer, 401: OpenApiResponse(description="Invalid credentials")},
        description="Authenticate with email + password; returns a JWT pair",
        tags=["Auth"],
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = authenticate(
            request=request,
            email=serializer.validated_data["email"],
            password=serializer.validated_data["password"],
        )

        if not user:
            return error_response(
                code="INVALID_CREDENTIALS",
                message="Invalid credentials",
                http_status=status.HTTP_401_UNAUTHORIZED,
            )

        return Response({**_token_pair(user), "user": UserSerializer(user).data})


class CheckEmailView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [RegisterAnonThrottle]
    serializer_class = CheckEmailSerializer

    @extend_schema(
        request=CheckEmailSerializer,
        responses={200: OpenApiResponse(description='{"email": "...", "available": bool}')},
        description="Check whether an email is still available for registration",
        tags=["Auth"],
    )
    def post(self, request):
        serializer = CheckEmailSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        email = serializer.validated_data["email"]
        return Response({"email": email, "available": not email_taken(email)})
