from django.urls import path

from tickets.handlers import (
    PopularTicketsView,
    TicketAvailabilityView,
    TicketDetailView,
    TicketListView,
    TicketStatsView,
)

urlpatterns = [
    path("tickets", TicketListView.as_view(), name="ticket-list"),
    path("tickets/stats/popular", PopularTicketsView.as_view(), name="ticket-popular"),
    path("tickets/stats/overview", TicketStatsView.as_view(), name="ticket-stats"),
    path("tickets/<str:ticket_id>", TicketDetailView.as_view(), name="ticket-detail"),
    path(
        "tickets/<str:ticket_id>/toggle-availability",
        TicketAvailabilityView.as_view(),
        name="ticket-toggle-availability",
    ),
]
