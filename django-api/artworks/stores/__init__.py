from artworks.stores.interfaces import ArtworkStore

__all__ = ["ArtworkStore"]
