from artworks.services.artwork_service import ArtworkService

__all__ = ["ArtworkService"]
