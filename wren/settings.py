# wren/settings.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

IDENTIFIER_SIZE = 15
ALIGNMENT = 4
TANGENT_SLOT = 3


class PaddingMode(str, Enum):
    """How zero padding between faces and mip levels is skipped."""

    # Skip zero bytes until the first nonzero byte, however far that is.
    SCAN = "scan"
    # Skip zero bytes, never past the next alignment boundary.
    ALIGNED = "aligned"


@dataclass(frozen=True, slots=True)
class DecoderSettings:
    """Texture container decoder configuration."""

    identifier_size: int = IDENTIFIER_SIZE
    padding: PaddingMode = PaddingMode.SCAN
    alignment: int = ALIGNMENT

    def __post_init__(self) -> None:
        if self.identifier_size < 0:
            raise ValueError("identifier_size must be >= 0")
        if self.alignment <= 0:
            raise ValueError("alignment must be positive")
        # Accept plain strings ("scan") from config files.
        object.__setattr__(self, "padding", PaddingMode(self.padding))


@dataclass(frozen=True, slots=True)
class TangentSettings:
    """Tangent generator configuration."""

    slot: int = TANGENT_SLOT
