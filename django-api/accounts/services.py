"""Account operations on top of Django's auth models.

Passwords are hashed by Django's configured hasher; tokens are issued by
simplejwt.
"""

import logging
from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login
from django.db import IntegrityError, transaction
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from accounts.errors import AccountDisabledError, InvalidCredentialsError
from accounts.models import Profile, role_of
from common.errors import DuplicateKeyError

logger = logging.getLogger(__name__)

User = get_user_model()


@dataclass(frozen=True)
class TokenPair:
    access: str
    refresh: str


def issue_tokens(user) -> TokenPair:
    refresh = RefreshToken.for_user(user)
    return TokenPair(access=str(refresh.access_token), refresh=str(refresh))


def register_user(
    *,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    phone: str = "",
    role: str = Profile.Role.USER,
):
    """Create an account and its profile.

    Raises:
        DuplicateKeyError: If the email is already registered.
    """
    email = email.strip().lower()
    if User.objects.filter(username=email).exists():
        raise DuplicateKeyError("email")
    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=email,
                email=email,
                password=password,
                first_name=first_name.strip(),
                last_name=last_name.strip(),
            )
            Profile.objects.create(user=user, role=role, phone=phone or "")
    except IntegrityError as exc:
        raise DuplicateKeyError("email") from exc
    logger.info("Registered %s account %s", role, email)
    return user


def authenticate_user(email: str, password: str, *, admin_only: bool = False):
    """Check credentials and stamp the login time.

    Raises:
        InvalidCredentialsError: Unknown email, wrong password, or (for
            `admin_only`) a non-admin account.
        AccountDisabledError: If the account is inactive.
    """
    user = User.objects.filter(username=email.strip().lower()).select_related("profile").first()
    if user is None or not user.check_password(password):
        raise InvalidCredentialsError()
    if admin_only and role_of(user) != Profile.Role.ADMIN:
        raise InvalidCredentialsError("Incorrect administrator credentials")
    if not user.is_active:
        raise AccountDisabledError()
    update_last_login(None, user)
    return user


def update_profile(user, *, first_name: str | None = None, last_name: str | None = None, phone: str | None = None):
    if first_name is not None:
        user.first_name = first_name.strip()
    if last_name is not None:
        user.last_name = last_name.strip()
    user.save(update_fields=["first_name", "last_name"])
    if phone is not None:
        profile, _ = Profile.objects.get_or_create(user=user)
        profile.phone = phone
        profile.save(update_fields=["phone", "updated_at"])
    return user


def change_password(user, current_password: str, new_password: str) -> None:
    if not user.check_password(current_password):
        raise InvalidCredentialsError("Current password is incorrect")
    user.set_password(new_password)
    user.save(update_fields=["password"])
    logger.info("Password changed for %s", user.email)


def revoke_refresh_token(raw_token: str) -> None:
    """Blacklist a refresh token; unusable tokens are ignored."""
    try:
        RefreshToken(raw_token).blacklist()
    except TokenError as exc:
        logger.info("Ignoring logout with unusable refresh token: %s", exc)


def ensure_admin(email: str, password: str):
    """Create the administrator account if no account uses `email` yet.

    Returns the user and whether it was created.
    """
    existing = User.objects.filter(username=email.strip().lower()).first()
    if existing is not None:
        return existing, False
    user = register_user(
        email=email,
        password=password,
        first_name="Admin",
        last_name="Museum",
        role=Profile.Role.ADMIN,
    )
    user.is_staff = True
    user.save(update_fields=["is_staff"])
    return user, True
