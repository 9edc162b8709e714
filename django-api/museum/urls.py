from django.contrib import admin
from django.urls import include, path

from common.views import HealthView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/health", HealthView.as_view(), name="health"),
    path("api/auth/", include("accounts.urls")),
    path("api/", include("tickets.urls")),
    path("api/", include("purchases.urls")),
    path("api/", include("artworks.urls")),
]
