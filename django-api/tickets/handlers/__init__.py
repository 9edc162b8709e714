from tickets.handlers.views import (
    PopularTicketsView,
    TicketAvailabilityView,
    TicketDetailView,
    TicketListView,
    TicketStatsView,
)

__all__ = [
    "TicketListView",
    "TicketDetailView",
    "TicketAvailabilityView",
    "PopularTicketsView",
    "TicketStatsView",
]
