"""
Models for the accounts app.

A `Profile` extends the built-in `auth.User` with the role that separates
shoppers from administrators, plus a contact phone.  The user's email is
also its username.
"""

from django.conf import settings
from django.db import models


class Profile(models.Model):
    """Extension of Django's built-in User model."""

    class Role(models.TextChoices):
        USER = "user", "User"
        ADMIN = "admin", "Admin"

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.USER, db_index=True)
    phone = models.CharField(max_length=20, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.user.email} ({self.role})"


def role_of(user) -> str:
    """Role of an authenticated user; users without a profile are shoppers."""
    profile = getattr(user, "profile", None)
    return profile.role if profile is not None else Profile.Role.USER
