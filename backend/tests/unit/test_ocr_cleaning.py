from __future__ import annotations

import io

import pytest
from PIL import Image

from app.services import ocr as ocr_module
from app.services.ocr import OCRService
from tests.fixtures.ocr_mocks import MOCK_OCR_BASURA_TEXT


def _png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (20, 10), "white").save(buffer, format="PNG")
    return buffer.getvalue()


def test_clean_ocr_text_drops_garbage_lines_and_tokens():
    assert OCRService.clean_ocr_text(MOCK_OCR_BASURA_TEXT) == "NOMBRE JUAN PEREZ\nDE LA\nCURP"


def test_clean_ocr_text_empty():
    assert OCRService.clean_ocr_text("") == ""


def test_assess_ocr_text_scores():
    corto = OCRService.assess_ocr_text("abc")
    legible = OCRService.assess_ocr_text(
        "Contrato individual de trabajo entre la empresa y el trabajador con fecha y firma"
    )
    basura = OCRService.assess_ocr_text("@@@ ### $$$ %%% &&&")

    assert (corto.valido, corto.puntaje, corto.motivo) == (False, 0, "Texto muy corto")
    assert legible.valido
    assert legible.puntaje >= 50
    assert legible.motivo == "Texto legible"
    assert not basura.valido
    assert basura.puntaje == 0


def test_image_to_text_filters_low_confidence_words(monkeypatch):
    def fake_image_to_data(imagen, lang=None, output_type=None):
        return {
            "text": ["NOMBRE", "JUAN", "xx", "", "CURP"],
            "conf": ["95", "88.5", "12", "-1", "91"],
            "block_num": [1, 1, 1, 1, 2],
            "par_num": [1, 1, 1, 1, 1],
            "line_num": [1, 1, 2, 2, 1],
        }

    monkeypatch.setattr(ocr_module.pytesseract, "image_to_data", fake_image_to_data)

    assert OCRService.image_to_text(Image.new("RGB", (10, 10))) == "NOMBRE JUAN\nCURP"


def test_image_to_text_degrades_when_tesseract_missing(monkeypatch):
    def fake_image_to_data(imagen, lang=None, output_type=None):
        raise ocr_module.pytesseract.TesseractNotFoundError()

    monkeypatch.setattr(ocr_module.pytesseract, "image_to_data", fake_image_to_data)

    assert OCRService.image_to_text(Image.new("RGB", (10, 10))) == ""


def test_read_document_image(monkeypatch):
    monkeypatch.setattr(OCRService, "image_to_text", staticmethod(lambda imagen: "NOMBRE JUAN"))

    assert OCRService.read_document(_png_bytes(), "ine.png") == ("NOMBRE JUAN", "ESCANEADO")


@pytest.mark.parametrize(
    ("contenido", "filename"),
    [(b"", "ine.png"), (b"no es una imagen", "ine.txt"), (b"%PDF-roto", "ine.pdf")],
)
def test_read_document_rejects_unreadable(contenido, filename):
    with pytest.raises(ValueError):
        OCRService.read_document(contenido, filename)
