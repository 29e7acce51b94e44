import dataclasses
import struct

import pytest

from tests.conftest import IDENTIFIER, build_container
from wren import DecoderSettings, PaddingMode, read_ktx
from wren.errors import TruncatedDataError, UnsupportedFormatError
from wren.texture import KtxReader, resolve_upload_format
from wren.texture.formats import (
    GL_FLOAT,
    GL_R11F_G11F_B10F,
    GL_RGB,
    GL_RGBA,
    GL_UNSIGNED_BYTE,
    GL_UNSIGNED_INT_10F_11F_11F_REV,
)


def test_decode_rgba_container(rgba_container):
    info = read_ktx(rgba_container)

    assert info.identifier == IDENTIFIER.decode("latin-1")
    assert info.little_endian is True
    assert info.gl_type == GL_UNSIGNED_BYTE
    assert info.gl_format == GL_RGBA
    assert info.number_of_mipmap_levels == 3
    assert len(info.mipmaps) == 3
    assert [m.width for m in info.mipmaps] == [4, 2, 1]
    assert info.key_value_data[0].name == "KTXorientation"
    assert len(info.face(0)) == 64
    assert len(info.face(2)) == 4


def test_decode_cubemap():
    info = read_ktx(build_container(width=8, height=8, levels=4, faces=6))

    assert info.is_cubemap
    assert len(info.mipmaps) == 4
    for m in info.mipmaps:
        assert len(m.elements) == 1
        assert len(m.elements[0].faces) == 6
    assert info.mipmaps[-1].width == 1


def test_decode_array_texture():
    info = read_ktx(build_container(width=4, height=4, array_elements=3))

    assert info.number_of_array_elements == 3
    assert len(info.mipmaps[0].elements) == 3
    assert not info.is_cubemap


def test_decode_3d_texture():
    info = read_ktx(build_container(width=4, height=4, depth=4, levels=3))

    assert [m.depth for m in info.mipmaps] == [4, 2, 1]
    assert len(info.face(0)) == 4 * 4 * 16
    assert len(info.face(1)) == 2 * 2 * 8
    assert len(info.face(2)) == 1 * 1 * 4


def test_decode_big_endian_float_texture():
    raw = build_container(
        width=3,
        height=2,
        levels=2,
        gl_type=GL_FLOAT,
        gl_type_size=4,
        gl_format=GL_RGB,
        little_endian=False,
        key_values=[("sh", b"1 2 3")],
    )
    # Big-endian imageSize fields start with zero bytes, which a zero scan
    # would take as padding.
    info = read_ktx(raw, DecoderSettings(padding=PaddingMode.ALIGNED))

    assert info.little_endian is False
    assert info.mipmaps[0].image_size == 2 * 36
    assert len(info.face(0)) == 2 * 36
    assert len(info.face(1)) == 12
    assert bytes(info.key_value_data[0].value) == b"1 2 3"


def test_face_slices_alias_the_input_buffer():
    raw = bytearray(build_container(width=2, height=2))
    info = read_ktx(raw)
    face = info.face(0)

    offset = len(raw) - len(face)
    raw[offset] = 0xEE
    assert face[0] == 0xEE


def test_container_info_is_immutable(rgba_container):
    info = read_ktx(rgba_container)
    with pytest.raises(dataclasses.FrozenInstanceError):
        info.pixel_width = 1  # type: ignore[misc]


def test_truncated_header():
    with pytest.raises(TruncatedDataError) as info:
        read_ktx(build_container()[:20])
    assert info.value.section == "header"


def test_truncated_payload(rgba_container):
    with pytest.raises(TruncatedDataError):
        read_ktx(rgba_container[:-3])


def test_compressed_container_is_unsupported():
    raw = IDENTIFIER + b"\x01\x02\x03\x04" + struct.pack(
        "<12I", 0, 1, 0, 0x83F0, 0x1907, 4, 4, 0, 0, 1, 1, 0
    )
    with pytest.raises(UnsupportedFormatError):
        read_ktx(raw + bytes(12))


def test_default_settings_skip_zero_runs_between_faces_and_levels():
    assert DecoderSettings().padding is PaddingMode.SCAN
    raw = build_container(
        width=2,
        height=2,
        levels=2,
        faces=6,
        face_padding=b"\x00" * 4,
        level_padding=b"\x00" * 4,
    )
    info = read_ktx(raw)

    for m in info.mipmaps:
        for f, face in enumerate(m.elements[0].faces):
            assert bytes(face) == bytes([1 + m.level * 64 + f]) * len(face)
    assert info.face(0, face=1)[0] == 2


def test_key_value_length_excludes_sizes_and_padding():
    entry = b"sh\x000.5 1\x00"
    # 1x1 RGBA8, one level, bytesOfKeyValueData = 9.
    header = struct.pack(
        "<12I",
        *(GL_UNSIGNED_BYTE, 1, GL_RGBA, 0x8058, GL_RGBA),
        *(1, 1, 0, 0, 1, 1, len(entry)),
    )
    raw = (
        IDENTIFIER
        + b"\x01\x02\x03\x04"
        + header
        + struct.pack("<I", len(entry))
        + entry
        + b"\x00" * 3
        + struct.pack("<I", 4)
        + b"\x11\x22\x33\x44"
    )
    info = read_ktx(raw)

    assert [kv.name for kv in info.key_value_data] == ["sh"]
    assert bytes(info.face(0)) == b"\x11\x22\x33\x44"


def test_settings_identifier_size_and_aligned_padding():
    # Zero texels at the start of every face must survive aligned padding.
    raw = build_container(
        identifier=IDENTIFIER[:12],
        width=2,
        height=2,
        faces=6,
        fill=lambda level, e, f: 0,
    )
    settings = DecoderSettings(identifier_size=12, padding="aligned")
    assert settings.padding is PaddingMode.ALIGNED

    info = KtxReader(settings).read(raw)
    assert info.identifier == IDENTIFIER[:12].decode("latin-1")
    assert [bytes(f) for f in info.mipmaps[0].elements[0].faces] == [bytes(16)] * 6


def test_invalid_settings():
    with pytest.raises(ValueError):
        DecoderSettings(alignment=0)
    with pytest.raises(ValueError):
        DecoderSettings(padding="sometimes")


def test_upload_format_resolution(rgba_container):
    info = read_ktx(rgba_container)
    assert resolve_upload_format(info) == (
        info.gl_internal_format,
        GL_RGBA,
        GL_UNSIGNED_BYTE,
    )

    packed = read_ktx(
        build_container(
            width=2,
            height=2,
            gl_type=GL_FLOAT,
            gl_type_size=4,
            gl_format=GL_RGB,
            gl_internal_format=GL_R11F_G11F_B10F,
        )
    )
    assert resolve_upload_format(packed) == (
        GL_R11F_G11F_B10F,
        GL_RGB,
        GL_UNSIGNED_INT_10F_11F_11F_REV,
    )
