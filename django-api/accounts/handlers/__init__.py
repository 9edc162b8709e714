from accounts.handlers.views import (
    AdminLoginView,
    ChangePasswordView,
    LoginView,
    LogoutView,
    MeView,
    ProfileView,
    RegisterView,
)

__all__ = [
    "RegisterView",
    "LoginView",
    "AdminLoginView",
    "MeView",
    "ProfileView",
    "ChangePasswordView",
    "LogoutView",
]
