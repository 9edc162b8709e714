"""Scan-code generation shared by purchases and artworks.

Codes are `<prefix><epoch millis><5 random [A-Z0-9]>`.  They are collision
resistant, not unique by construction: the unique constraint on the code
column decides, and a clash surfaces as `DuplicateCodeError`.
"""

import secrets
import string
import time
from typing import Callable

CODE_ALPHABET = string.ascii_uppercase + string.digits
SUFFIX_LENGTH = 5

PURCHASE_CODE_PREFIX = "PUR"
ARTWORK_CODE_PREFIX = "QR"


class UniqueCodeGenerator:
    """Best-effort producer of scan codes."""

    def __init__(
        self,
        prefix: str,
        clock: Callable[[], float] = time.time,
        suffix_length: int = SUFFIX_LENGTH,
    ) -> None:
        self._prefix = prefix
        self._clock = clock
        self._suffix_length = suffix_length

    def generate(self) -> str:
        millis = int(self._clock() * 1000)
        suffix = "".join(secrets.choice(CODE_ALPHABET) for _ in range(self._suffix_length))
        return f"{self._prefix}{millis}{suffix}"
