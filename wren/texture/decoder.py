# wren/texture/decoder.py
from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from wren.errors import OutOfBoundsError, TruncatedDataError
from wren.log import get_logger
from wren.settings import DecoderSettings
from wren.texture.cursor import ByteCursor, BytesLike
from wren.texture.header import parse_header
from wren.texture.metadata import parse_key_values
from wren.texture.mipmaps import parse_mipmaps
from wren.texture.types import ContainerInfo

logger = get_logger(__name__)


class KtxReader:
    """
    Decodes a texture container held entirely in memory.

    A reader holds no per-call state, so one instance can decode any number
    of buffers.
    """

    def __init__(self, settings: Optional[DecoderSettings] = None) -> None:
        self.settings = settings or DecoderSettings()

    def read(self, raw: BytesLike) -> ContainerInfo:
        cursor = ByteCursor(raw)

        try:
            header = parse_header(cursor, self.settings.identifier_size)
        except OutOfBoundsError as exc:
            raise TruncatedDataError(
                f"Container header is truncated: {exc}",
                section="header",
                offset=exc.offset,
                size=exc.size,
                length=exc.length,
            ) from exc

        key_values = parse_key_values(
            cursor, header.bytes_of_key_value_data, header.little_endian
        )
        mipmaps = parse_mipmaps(
            cursor,
            header,
            padding=self.settings.padding,
            alignment=self.settings.alignment,
        )

        logger.debug(
            "Decoded container %dx%dx%d: %d level(s), %d element(s), "
            "%d face(s), %d key/value entr(ies), %d trailing byte(s)",
            header.pixel_width,
            header.pixel_height,
            header.pixel_depth,
            header.number_of_mipmap_levels,
            header.number_of_array_elements,
            header.number_of_faces,
            len(key_values),
            cursor.remaining,
        )

        return ContainerInfo(
            **asdict(header), key_value_data=key_values, mipmaps=mipmaps
        )


def read_ktx(
    raw: BytesLike, settings: Optional[DecoderSettings] = None
) -> ContainerInfo:
    """Decode ``raw`` into a ContainerInfo."""
    return KtxReader(settings).read(raw)
