"""Serializers for account requests and responses."""

from django.core.validators import RegexValidator
from rest_framework import serializers

from accounts.models import role_of

NAME_VALIDATOR = RegexValidator(
    r"^[A-Za-zÀ-ÿ\s'\-]+$",
    "Names may only contain letters, spaces, apostrophes and hyphens.",
)
PHONE_VALIDATOR = RegexValidator(
    r"^\+?[0-9\s\-()]{8,20}$",
    "Provide a valid phone number.",
)
PASSWORD_STRENGTH_VALIDATOR = RegexValidator(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)",
    "Password needs at least one lowercase letter, one uppercase letter and one digit.",
)


class UserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    email = serializers.EmailField()
    phone = serializers.SerializerMethodField()
    role = serializers.SerializerMethodField()
    is_active = serializers.BooleanField()
    last_login = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField(source="date_joined")

    def get_phone(self, user) -> str:
        profile = getattr(user, "profile", None)
        return profile.phone if profile is not None else ""

    def get_role(self, user) -> str:
        return str(role_of(user))


class RegisterSerializer(serializers.Serializer):
    first_name = serializers.CharField(min_length=2, max_length=50, validators=[NAME_VALIDATOR])
    last_name = serializers.CharField(min_length=2, max_length=50, validators=[NAME_VALIDATOR])
    email = serializers.EmailField()
    password = serializers.CharField(
        min_length=6,
        max_length=128,
        write_only=True,
        trim_whitespace=False,
        validators=[PASSWORD_STRENGTH_VALIDATOR],
    )
    phone = serializers.CharField(required=False, allow_blank=True, validators=[PHONE_VALIDATOR])


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


class ProfileUpdateSerializer(serializers.Serializer):
    first_name = serializers.CharField(min_length=2, max_length=50, required=False, validators=[NAME_VALIDATOR])
    last_name = serializers.CharField(min_length=2, max_length=50, required=False, validators=[NAME_VALIDATOR])
    phone = serializers.CharField(required=False, allow_blank=True, validators=[PHONE_VALIDATOR])


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(trim_whitespace=False)
    new_password = serializers.CharField(min_length=6, max_length=128, trim_whitespace=False)


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField(required=False, allow_blank=True)
