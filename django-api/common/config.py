"""Explicit configuration passed to service constructors."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Self


@dataclass(frozen=True)
class QrOptions:
    """Rendering options for scan codes."""

    size: int = 300
    margin: int = 2
    dark: str = "#000000"
    light: str = "#FFFFFF"

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError("QR size must be positive")
        if self.margin < 0:
            raise ValueError("QR margin cannot be negative")


@dataclass(frozen=True)
class MuseumConfig:
    tax_rate: Decimal = Decimal("0.18")
    purchase_validity_days: int = 30
    code_attempts: int = 3
    qr: QrOptions = QrOptions()
    media_base_url: str = "http://localhost:8000"
    admin_email: str = ""
    admin_password: str = ""

    def __post_init__(self) -> None:
        if not Decimal("0") <= self.tax_rate < Decimal("1"):
            raise ValueError("Tax rate must be in [0, 1)")
        if self.purchase_validity_days < 1:
            raise ValueError("Purchase validity must be at least one day")
        if self.code_attempts < 1:
            raise ValueError("At least one code attempt is required")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> Self:
        """Build from the `MUSEUM` settings block; missing keys keep defaults."""
        defaults = cls()
        return cls(
            tax_rate=Decimal(str(values.get("TAX_RATE", defaults.tax_rate))),
            purchase_validity_days=int(values.get("PURCHASE_VALIDITY_DAYS", defaults.purchase_validity_days)),
            code_attempts=int(values.get("CODE_ATTEMPTS", defaults.code_attempts)),
            qr=QrOptions(
                size=int(values.get("QR_SIZE", defaults.qr.size)),
                margin=int(values.get("QR_MARGIN", defaults.qr.margin)),
                dark=values.get("QR_DARK", defaults.qr.dark),
                light=values.get("QR_LIGHT", defaults.qr.light),
            ),
            media_base_url=values.get("MEDIA_BASE_URL", defaults.media_base_url),
            admin_email=values.get("ADMIN_EMAIL", defaults.admin_email),
            admin_password=values.get("ADMIN_PASSWORD", defaults.admin_password),
        )
