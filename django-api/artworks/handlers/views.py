"""HTTP handlers (views) - handle HTTP concerns only.

Domain errors are mapped to responses by common.exception_handler.
"""

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsAdmin, IsAdminOrReadOnly
from artworks.handlers.serializers import ArtworkInputSerializer, ArtworkSerializer, ArtworkStatsSerializer
from artworks.wiring import artwork_service, serializer_context
from common.pagination import DefaultPagination, limit_param


class ArtworkListView(APIView):
    """Handler for GET/POST /api/artworks"""

    permission_classes = [IsAdminOrReadOnly]

    def get(self, request: Request) -> Response:
        params = request.query_params
        artworks = artwork_service().list_artworks(
            query=params.get("q"),
            category=params.get("category"),
            room=params.get("room"),
        )
        paginator = DefaultPagination()
        page = paginator.paginate_queryset(artworks, request, view=self)
        data = ArtworkSerializer(page, many=True, context=serializer_context()).data
        return paginator.get_paginated_response(data)

    def post(self, request: Request) -> Response:
        serializer = ArtworkInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        artwork = artwork_service().create_artwork(serializer.validated_data, added_by=request.user.id)
        return Response(
            ArtworkSerializer(artwork, context=serializer_context()).data,
            status=status.HTTP_201_CREATED,
        )


class ArtworkDetailView(APIView):
    """Handler for GET/PUT/DELETE /api/artworks/{artwork_id}"""

    permission_classes = [IsAdminOrReadOnly]

    def get(self, request: Request, artwork_id: str) -> Response:
        artwork = artwork_service().get_artwork(artwork_id)
        return Response(ArtworkSerializer(artwork, context=serializer_context()).data)

    def put(self, request: Request, artwork_id: str) -> Response:
        serializer = ArtworkInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        artwork = artwork_service().update_artwork(artwork_id, serializer.validated_data)
        return Response(ArtworkSerializer(artwork, context=serializer_context()).data)

    def delete(self, request: Request, artwork_id: str) -> Response:
        artwork_service().delete_artwork(artwork_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ArtworkScanView(APIView):
    """Handler for GET /api/artworks/qr/{code}"""

    permission_classes = [AllowAny]

    def get(self, request: Request, code: str) -> Response:
        artwork = artwork_service().scan(code)
        return Response(ArtworkSerializer(artwork, context=serializer_context()).data)


class ArtworkAvailabilityView(APIView):
    """Handler for PATCH /api/artworks/{artwork_id}/toggle-availability"""

    permission_classes = [IsAdmin]

    def patch(self, request: Request, artwork_id: str) -> Response:
        artwork = artwork_service().toggle_availability(artwork_id)
        return Response(ArtworkSerializer(artwork, context=serializer_context()).data)


class PopularArtworksView(APIView):
    """Handler for GET /api/artworks/stats/popular"""

    permission_classes = [AllowAny]

    def get(self, request: Request) -> Response:
        artworks = artwork_service().popular_artworks(limit_param(request))
        return Response(ArtworkSerializer(artworks, many=True, context=serializer_context()).data)


class ArtworkStatsView(APIView):
    """Handler for GET /api/artworks/stats/overview"""

    permission_classes = [IsAdmin]

    def get(self, request: Request) -> Response:
        return Response(ArtworkStatsSerializer(artwork_service().stats()).data)
