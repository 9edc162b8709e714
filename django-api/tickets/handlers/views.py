"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain error mapping to common.exception_handler
- Never contain business logic
"""

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsAdmin, IsAdminOrReadOnly
from common.pagination import DefaultPagination, limit_param
from tickets.handlers.serializers import TicketInputSerializer, TicketSerializer, TicketStatsSerializer
from tickets.wiring import ticket_service


class TicketListView(APIView):
    """Handler for GET/POST /api/tickets"""

    permission_classes = [IsAdminOrReadOnly]

    def get(self, request: Request) -> Response:
        tickets = ticket_service().list_tickets(category=request.query_params.get("category"))
        paginator = DefaultPagination()
        page = paginator.paginate_queryset(tickets, request, view=self)
        return paginator.get_paginated_response(TicketSerializer(page, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = TicketInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ticket = ticket_service().create_ticket(serializer.validated_data, created_by=request.user.id)
        return Response(TicketSerializer(ticket).data, status=status.HTTP_201_CREATED)


class TicketDetailView(APIView):
    """Handler for GET/PUT/DELETE /api/tickets/{ticket_id}"""

    permission_classes = [IsAdminOrReadOnly]

    def get(self, request: Request, ticket_id: str) -> Response:
        return Response(TicketSerializer(ticket_service().get_ticket(ticket_id)).data)

    def put(self, request: Request, ticket_id: str) -> Response:
        serializer = TicketInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ticket = ticket_service().update_ticket(ticket_id, serializer.validated_data)
        return Response(TicketSerializer(ticket).data)

    def delete(self, request: Request, ticket_id: str) -> Response:
        ticket_service().delete_ticket(ticket_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class TicketAvailabilityView(APIView):
    """Handler for PATCH /api/tickets/{ticket_id}/toggle-availability"""

    permission_classes = [IsAdmin]

    def patch(self, request: Request, ticket_id: str) -> Response:
        ticket = ticket_service().toggle_availability(ticket_id)
        return Response(TicketSerializer(ticket).data)


class PopularTicketsView(APIView):
    """Handler for GET /api/tickets/stats/popular"""

    permission_classes = [AllowAny]

    def get(self, request: Request) -> Response:
        tickets = ticket_service().popular_tickets(limit_param(request))
        return Response(TicketSerializer(tickets, many=True).data)


class TicketStatsView(APIView):
    """Handler for GET /api/tickets/stats/overview"""

    permission_classes = [IsAdmin]

    def get(self, request: Request) -> Response:
        return Response(TicketStatsSerializer(ticket_service().stats()).data)
