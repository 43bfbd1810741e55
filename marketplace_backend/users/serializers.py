"""
PATH: users/serializers.py

Account input/output shapes. Uniqueness and role assignment live in
users/services/registration.py; these only validate form.
"""

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from users.models.user import normalize_login_email

User = get_user_model()


class _EmailField(serializers.EmailField):
    def to_internal_value(self, data):
        return normalize_login_email(super().to_internal_value(data))


class RegisterSerializer(serializers.Serializer):
    """Customer sign-up."""

    email = _EmailField()
    password = serializers.CharField(write_only=True, validators=[validate_password], style={"input_type": "password"})
    first_name = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    last_name = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")


class RegisterArtisanSerializer(RegisterSerializer):
    """Seller sign-up: the account and its public profile in one request."""

    display_name = serializers.CharField(max_length=200)
    bio = serializers.CharField(required=False, allow_blank=True, default="")


class LoginSerializer(serializers.Serializer):
    email = _EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


class CheckEmailSerializer(serializers.Serializer):
    email = _EmailField()


class UserSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "first_name", "last_name", "full_name", "role", "is_active", "created_at"]
        read_only_fields = fields


class LoginResponseSerializer(serializers.Serializer):
    access = serializers.CharField()
    refresh = serializers.CharField()
    user = UserSerializer()
