import io
import struct
import zipfile
import zlib
from collections.abc import Callable

import pytest
from PIL import Image, ImageDraw
from pptx import Presentation
from pptx.util import Inches
from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

ImageFactory = Callable[..., bytes]


def _png(size: tuple[int, int], color: object = "white", mode: str = "RGB") -> bytes:
    buf = io.BytesIO()
    Image.new(mode, size, color).save(buf, format="PNG")  # type: ignore[arg-type]
    return buf.getvalue()


def _boxed_png(size: tuple[int, int] = (64, 64)) -> bytes:
    """White canvas with a dark rectangle: distinct from any solid image."""
    image = Image.new("RGB", size, "white")
    w, h = size
    ImageDraw.Draw(image).rectangle((w // 4, h // 4, 3 * w // 4, 3 * h // 4), fill=(20, 20, 90))
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def make_png() -> ImageFactory:
    """Return a factory building solid-colour PNG bytes."""
    return _png


@pytest.fixture()
def boxed_png_bytes() -> bytes:
    return _boxed_png()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def image_pdf_bytes() -> bytes:
    """One page with a caption and a 64x64 embedded image."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Figure below")
    c.drawImage(ImageReader(io.BytesIO(_boxed_png())), 72, 500, width=128, height=128)
    c.save()
    return buf.getvalue()


@pytest.fixture()
def tiny_image_pdf_bytes() -> bytes:
    """One page whose only image is 8x8 pixels."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawImage(ImageReader(io.BytesIO(_png((8, 8), "black"))), 72, 500, width=64, height=64)
    c.save()
    return buf.getvalue()


@pytest.fixture()
def pptx_bytes() -> bytes:
    """Two slides with text; the same picture appears on both."""
    presentation = Presentation()
    layout = presentation.slide_layouts[6]
    picture = _boxed_png()
    for text in ("Hello slide", "Second slide"):
        slide = presentation.slides.add_slide(layout)
        box = slide.shapes.add_textbox(Inches(1), Inches(1), Inches(4), Inches(1))
        box.text_frame.text = text
        slide.shapes.add_picture(io.BytesIO(picture), Inches(1), Inches(3))
    buf = io.BytesIO()
    presentation.save(buf)
    return buf.getvalue()


def _zip(parts: dict[str, bytes | str]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as package:
        for name, content in parts.items():
            package.writestr(name, content)
    return buf.getvalue()


@pytest.fixture()
def build_zip() -> Callable[[dict[str, bytes | str]], bytes]:
    return _zip


WORD_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
SHEET_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"


@pytest.fixture()
def docx_bytes() -> bytes:
    document = (
        f'<w:document xmlns:w="{WORD_NS}"><w:body>'
        "<w:p><w:r><w:t>Hello</w:t></w:r><w:r><w:t xml:space=\"preserve\"> world</w:t></w:r></w:p>"
        "<w:p><w:r><w:t>Second line</w:t></w:r></w:p>"
        "</w:body></w:document>"
    )
    return _zip({"word/document.xml": document, "word/media/image1.png": _boxed_png()})


@pytest.fixture()
def xlsx_bytes() -> bytes:
    workbook = (
        f'<workbook xmlns="{SHEET_NS}"><sheets>'
        '<sheet name="Summary" sheetId="1"/><sheet name="Data" sheetId="2"/>'
        "</sheets></workbook>"
    )
    shared = f'<sst xmlns="{SHEET_NS}"><si><t>Name</t></si><si><t>Total</t></si></sst>'
    sheet1 = (
        f'<worksheet xmlns="{SHEET_NS}"><sheetData><row>'
        '<c r="A1" t="s"><v>0</v></c><c r="B1" t="s"><v>1</v></c>'
        "</row></sheetData></worksheet>"
    )
    sheet2 = (
        f'<worksheet xmlns="{SHEET_NS}"><sheetData><row>'
        '<c r="A1"><v>42</v></c>'
        '<c r="B1" t="inlineStr"><is><t>inline</t></is></c>'
        '<c r="C1" t="b"><v>1</v></c>'
        "</row></sheetData></worksheet>"
    )
    return _zip(
        {
            "xl/workbook.xml": workbook,
            "xl/sharedStrings.xml": shared,
            "xl/worksheets/sheet2.xml": sheet2,
            "xl/worksheets/sheet1.xml": sheet1,
        }
    )


def _oversized_png(width: int = 20000, height: int = 10000) -> bytes:
    """Small PNG whose header declares ``width`` x ``height`` pixels."""
    data = bytearray(_png((20, 20), "white"))
    header = bytearray(data[12:29])  # chunk type + IHDR payload
    header[4:12] = struct.pack(">II", width, height)
    data[12:29] = header
    data[29:33] = struct.pack(">I", zlib.crc32(bytes(header)))
    return bytes(data)


@pytest.fixture()
def oversized_png_bytes() -> bytes:
    return _oversized_png()
