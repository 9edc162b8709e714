"""Integration tests for the artwork catalogue and gallery scans.

Run with: pytest tests/test_artworks_api.py -v
"""

import uuid

import pytest
from rest_framework.test import APIClient

from artworks.models import Artwork

NEW_ARTWORK = {
    "title": "Les Demoiselles de Gorée",
    "artist": "Aminata Sow",
    "year": 1987,
    "description": "Oil on canvas depicting the harbour at dawn",
    "image": "demoiselles.jpg",
    "category": "painting",
    "room": "Salle Senghor",
    "price": "0",
    "dimensions": {"width": "120.5", "height": "80", "unit": "cm"},
    "materials": ["oil", "canvas", " "],
}


@pytest.fixture
def created(admin_client: APIClient) -> dict:
    response = admin_client.post("/api/artworks", NEW_ARTWORK, format="json")
    assert response.status_code == 201
    return response.json()


@pytest.mark.django_db
class TestArtworkAdmin:
    """Tests for the administrator artwork endpoints"""

    def test_create_allocates_scan_code_and_qr(self, created, admin_user):
        assert created["scan_code"].startswith("QR")
        assert created["qr_image"].startswith("data:image/png;base64,")
        assert created["materials"] == ["oil", "canvas"]
        assert created["dimensions"]["width"] == "120.50"
        assert created["dimensions"]["depth"] is None
        assert created["added_by"] == admin_user.id
        assert created["view_count"] == 0

    def test_create_requires_admin(self, shopper_client: APIClient):
        assert shopper_client.post("/api/artworks", NEW_ARTWORK, format="json").status_code == 403

    def test_create_rejects_future_year(self, admin_client: APIClient):
        response = admin_client.post("/api/artworks", {**NEW_ARTWORK, "year": 9999}, format="json")
        assert response.status_code == 400

    def test_update(self, created, admin_client: APIClient):
        response = admin_client.put(
            f"/api/artworks/{created['id']}",
            {**NEW_ARTWORK, "room": "Salle Diop"},
            format="json",
        )
        assert response.status_code == 200
        assert response.json()["room"] == "Salle Diop"
        assert response.json()["scan_code"] == created["scan_code"]

    def test_delete(self, created, admin_client: APIClient):
        assert admin_client.delete(f"/api/artworks/{created['id']}").status_code == 204
        assert not Artwork.objects.filter(pk=created["id"]).exists()

    def test_overview(self, created, admin_client: APIClient):
        body = admin_client.get("/api/artworks/stats/overview").json()
        assert body["total_artworks"] == 1
        assert body["category_stats"] == [{"category": "painting", "count": 1}]
        assert body["room_stats"] == [{"room": "Salle Senghor", "count": 1}]


@pytest.mark.django_db
class TestArtworkBrowsing:
    """Tests for GET /api/artworks and GET /api/artworks/{id}"""

    def test_detail_counts_views(self, created, api_client: APIClient):
        first = api_client.get(f"/api/artworks/{created['id']}").json()
        second = api_client.get(f"/api/artworks/{created['id']}").json()
        assert (first["view_count"], second["view_count"]) == (1, 2)

    def test_image_url_uses_media_base(self, created, api_client: APIClient, settings):
        settings.MUSEUM = {**settings.MUSEUM, "MEDIA_BASE_URL": "https://media.example.org/"}
        body = api_client.get(f"/api/artworks/{created['id']}").json()
        assert body["image_url"] == "https://media.example.org/uploads/demoiselles.jpg"

    def test_unknown_artwork(self, api_client: APIClient):
        response = api_client.get(f"/api/artworks/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ARTWORK_NOT_FOUND"

    def test_search_matches_artist_case_insensitively(self, created, api_client: APIClient):
        assert api_client.get("/api/artworks", {"q": "aminata"}).json()["count"] == 1
        assert api_client.get("/api/artworks", {"q": "Picasso"}).json()["count"] == 0

    def test_search_text_too_short(self, api_client: APIClient):
        response = api_client.get("/api/artworks", {"q": "a"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_FAILED"

    def test_room_filter(self, created, api_client: APIClient):
        assert api_client.get("/api/artworks", {"room": "Salle Senghor"}).json()["count"] == 1
        assert api_client.get("/api/artworks", {"room": "Annexe"}).json()["count"] == 0

    def test_popular(self, created, admin_client: APIClient, api_client: APIClient):
        other = admin_client.post("/api/artworks", {**NEW_ARTWORK, "title": "Baobab"}, format="json").json()
        api_client.get(f"/api/artworks/{other['id']}")
        body = api_client.get("/api/artworks/stats/popular").json()
        assert [a["title"] for a in body] == ["Baobab", NEW_ARTWORK["title"]]


@pytest.mark.django_db
class TestArtworkScan:
    """Tests for GET /api/artworks/qr/{code}"""

    def test_scan_counts(self, created, api_client: APIClient):
        response = api_client.get(f"/api/artworks/qr/{created['scan_code']}")
        assert response.status_code == 200
        assert response.json()["scan_count"] == 1
        assert Artwork.objects.get(pk=created["id"]).scan_count == 1

    def test_unknown_code(self, api_client: APIClient):
        assert api_client.get("/api/artworks/qr/QR1NOTHERE").status_code == 404

    def test_off_display_artwork(self, created, admin_client: APIClient, api_client: APIClient):
        admin_client.patch(f"/api/artworks/{created['id']}/toggle-availability")
        response = api_client.get(f"/api/artworks/qr/{created['scan_code']}")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "ARTWORK_UNAVAILABLE"
        assert Artwork.objects.get(pk=created["id"]).scan_count == 0
