# users/urls.py

from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .views import CheckEmailView, LoginView, MeView, RegisterArtisanView, RegisterView

app_name = "users"

urlpatterns = [
    # ---------------- PUBLIC AUTH ----------------
    path("register/", RegisterView.as_view(), name="register"),
    path("register-artisan/", RegisterArtisanView.as_view(), name="register-artisan"),
    path("login/", LoginView.as_view(), name="login"),
    path("check-email/", CheckEmailView.as_view(), name="check-email"),
    # ---------------- JWT (SimpleJWT) ----------------
    path("jwt/create/", TokenObtainPairView.as_view(), name="jwt-create"),
    path("jwt/refresh/", TokenRefreshView.as_view(), name="jwt-refresh"),
    # ---------------- AUTHENTICATED ----------------
    path("me/", MeView.as_view(), name="me"),
]
