from rest_framework.permissions import SAFE_METHODS, BasePermission

from accounts.models import Profile, role_of


class IsShopper(BasePermission):
    """Any active, authenticated account (shoppers and administrators)."""

    message = "Authentication required."

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_active)


class IsAdmin(BasePermission):
    message = "Administrator rights required."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return role_of(user) == Profile.Role.ADMIN


class IsAdminOrReadOnly(IsAdmin):
    """Reads for everyone, writes for administrators."""

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return super().has_permission(request, view)
