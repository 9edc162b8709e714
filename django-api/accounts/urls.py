from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from accounts.handlers import (
    AdminLoginView,
    ChangePasswordView,
    LoginView,
    LogoutView,
    MeView,
    ProfileView,
    RegisterView,
)

urlpatterns = [
    path("register", RegisterView.as_view(), name="auth-register"),
    path("login", LoginView.as_view(), name="auth-login"),
    path("admin/login", AdminLoginView.as_view(), name="auth-admin-login"),
    path("token/refresh", TokenRefreshView.as_view(), name="auth-token-refresh"),
    path("me", MeView.as_view(), name="auth-me"),
    path("profile", ProfileView.as_view(), name="auth-profile"),
    path("change-password", ChangePasswordView.as_view(), name="auth-change-password"),
    path("logout", LogoutView.as_view(), name="auth-logout"),
]
