"""Assemble artwork services over the ORM store."""

from artworks.services import ArtworkService
from artworks.stores.django_store import DjangoArtworkStore
from common.codes import ARTWORK_CODE_PREFIX
from common.wiring import code_encoder, code_generator, museum_config


def artwork_service() -> ArtworkService:
    config = museum_config()
    return ArtworkService(
        DjangoArtworkStore(),
        codes=code_generator(ARTWORK_CODE_PREFIX),
        encoder=code_encoder(config),
        code_attempts=config.code_attempts,
    )


def serializer_context() -> dict:
    return {"media_base_url": museum_config().media_base_url}
