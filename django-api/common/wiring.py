"""Builds shared collaborators from Django settings.

This is the only place that reads `settings.MUSEUM`; everything downstream
receives a `MuseumConfig`.
"""

from django.conf import settings

from common.codes import UniqueCodeGenerator
from common.config import MuseumConfig
from common.qr import QrCodeEncoder


def museum_config() -> MuseumConfig:
    return MuseumConfig.from_mapping(getattr(settings, "MUSEUM", {}))


def code_encoder(config: MuseumConfig) -> QrCodeEncoder:
    return QrCodeEncoder(config.qr)


def code_generator(prefix: str) -> UniqueCodeGenerator:
    return UniqueCodeGenerator(prefix)
