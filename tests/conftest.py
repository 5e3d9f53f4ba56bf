import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import card_press
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from card_press.core.models import AssetPayload, Dimension, PageSize, Slot, Template  # noqa: E402


def _encode(color, fmt: str, size=(63, 88), mode: str = "RGB") -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, size, color=color).save(buffer, format=fmt)
    return buffer.getvalue()


# Common test fixtures
@pytest.fixture
def make_png():
    """Factory for small PNG images: make_png(color=(r, g, b))."""
    def _make(color=(200, 30, 30), size=(63, 88)) -> bytes:
        return _encode(color, "PNG", size)
    return _make


@pytest.fixture
def png_bytes(make_png) -> bytes:
    return make_png()


@pytest.fixture
def jpeg_bytes() -> bytes:
    return _encode((30, 30, 200), "JPEG")


@pytest.fixture
def png_payload(png_bytes) -> AssetPayload:
    return AssetPayload(data=png_bytes, mime_type="image/png")


@pytest.fixture
def two_slot_template() -> Template:
    """A4 template with two MTG slots side by side."""
    return Template(
        id="tpl-2",
        name="Two up",
        page_size=PageSize.A4,
        card_size=Dimension(63, 88),
        slots=(Slot(10, 20), Slot(80, 20)),
    )


@pytest.fixture
def background_pdf() -> bytes:
    """Single A4 page carrying the text BACKGROUND."""
    import fitz

    doc = fitz.open()
    page = doc.new_page(width=595.28, height=841.89)
    page.insert_text((72, 72), "BACKGROUND")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def oversized_png() -> bytes:
    """PNG header declaring 30000x30000 pixels, past Pillow's bomb limit."""
    import struct
    import zlib

    def chunk(kind: bytes, body: bytes) -> bytes:
        return struct.pack(">I", len(body)) + kind + body + struct.pack(">I", zlib.crc32(kind + body))

    header = struct.pack(">IIBBBBB", 30000, 30000, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", header)
        + chunk(b"IDAT", zlib.compress(b""))
        + chunk(b"IEND", b"")
    )
