"""QR rendering for scan codes, backed by the `qrcode` library."""

import base64
import io
import logging
from abc import ABC, abstractmethod

import qrcode
from qrcode.constants import ERROR_CORRECT_M
from qrcode.exceptions import DataOverflowError

from common.config import QrOptions
from common.errors import EncodingFailedError

logger = logging.getLogger(__name__)


class CodeEncoder(ABC):
    """Turns a scan code into an embeddable image."""

    @abstractmethod
    def encode(self, text: str) -> str:
        """Return an image data URL for `text`.

        Raises:
            EncodingFailedError: If no image could be produced.
        """
        ...


class QrCodeEncoder(CodeEncoder):
    """Renders PNG data URLs sized to roughly `options.size` pixels."""

    def __init__(self, options: QrOptions) -> None:
        self._options = options

    def encode(self, text: str) -> str:
        try:
            qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, border=self._options.margin)
            qr.add_data(text)
            qr.make(fit=True)
            qr.box_size = max(1, self._options.size // (qr.modules_count + 2 * qr.border))
            image = qr.make_image(fill_color=self._options.dark, back_color=self._options.light)
            buffer = io.BytesIO()
            image.save(buffer)
        except (DataOverflowError, ValueError, OSError) as exc:
            logger.error("QR encoding failed for %s: %s", text, exc)
            raise EncodingFailedError() from exc
        return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")
