from types import SimpleNamespace

import pytest
from PIL import Image

from src.input_handler import InputHandler
from src.ocr_engine import OCREngine
from src.ocr_engine import tesseract_backend
from src.utils.exceptions import (
    FileNotFoundError as DTRFileNotFoundError,
    OCREngineNotAvailableError,
    OCRProcessingError,
)


class FakeOCREngine:
    def __init__(self, text):
        self.text = text
        self.calls = []

    def extract_text(self, image):
        self.calls.append(str(image))
        return self.text


def fake_pytesseract(text=" Time In 8:00am\nTime Out 5:00pm \n", version="5.3.0"):
    def get_tesseract_version():
        if isinstance(version, Exception):
            raise version
        return version

    return SimpleNamespace(
        get_tesseract_version=get_tesseract_version,
        image_to_string=lambda image, **kwargs: text,
        get_languages=lambda: ["eng", "osd"],
    )


# InputHandler

def test_load_text_file(tmp_path, standard_text):
    path = tmp_path / "dtr.txt"
    path.write_text(standard_text, encoding="utf-8")

    result = InputHandler().load(path)

    assert result.success
    assert result.file_type == "text"
    assert result.filename == "dtr.txt"
    assert result.text == standard_text


def test_load_image_goes_through_ocr(tmp_path):
    path = tmp_path / "scan.png"
    path.write_bytes(b"not checked by the fake engine")
    engine = FakeOCREngine("Biometric Log\n8:01am 5:03pm")

    result = InputHandler(ocr_engine=engine).load(path)

    assert result.success
    assert result.file_type == "image"
    assert result.text == "Biometric Log\n8:01am 5:03pm"
    assert engine.calls == [str(path)]


@pytest.mark.parametrize("filename, content", [
    ("missing.txt", None),
    ("report.pdf", b"%PDF-1.4"),
    ("empty.txt", b""),
])
def test_load_failures_are_reported(tmp_path, filename, content):
    path = tmp_path / filename
    if content is not None:
        path.write_bytes(content)

    result = InputHandler().load(path)

    assert not result.success
    assert result.error
    assert result.text == ""


def test_load_invalid_utf8(tmp_path):
    path = tmp_path / "latin.txt"
    path.write_bytes(b"Name: Jos\xe9")

    result = InputHandler().load(path)

    assert not result.success
    assert "Corrupted" in result.error


def test_load_batch(tmp_path):
    (tmp_path / "b.txt").write_text("Time In 8:00\nTime Out 17:00", encoding="utf-8")
    (tmp_path / "a.txt").write_text("Biometric\n8:00 17:00", encoding="utf-8")
    (tmp_path / "notes.md").write_text("ignored", encoding="utf-8")

    results = InputHandler().load_batch(tmp_path)

    assert [r.filename for r in results] == ["a.txt", "b.txt"]
    assert all(r.success for r in results)


def test_load_batch_missing_directory(tmp_path):
    with pytest.raises(DTRFileNotFoundError):
        InputHandler().load_batch(tmp_path / "nope")


# OCREngine

def test_ocr_extract_text_from_image(monkeypatch):
    monkeypatch.setattr(tesseract_backend, "pytesseract", fake_pytesseract())

    text = OCREngine().extract_text(Image.new("L", (20, 20), color=255))

    assert text == "Time In 8:00am\nTime Out 5:00pm"


def test_ocr_no_text_raises(monkeypatch):
    monkeypatch.setattr(tesseract_backend, "pytesseract", fake_pytesseract(text="  \n"))

    with pytest.raises(OCRProcessingError):
        OCREngine().extract_text(Image.new("RGB", (20, 20)))


def test_ocr_unreadable_image_raises(monkeypatch, tmp_path):
    monkeypatch.setattr(tesseract_backend, "pytesseract", fake_pytesseract())
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image")

    with pytest.raises(OCRProcessingError):
        OCREngine().extract_text(path)


def test_ocr_missing_tesseract(monkeypatch):
    monkeypatch.setattr(
        tesseract_backend,
        "pytesseract",
        fake_pytesseract(version=EnvironmentError("tesseract is not installed"))
    )

    with pytest.raises(OCREngineNotAvailableError):
        OCREngine()


def test_backend_languages_skip_osd(monkeypatch):
    monkeypatch.setattr(tesseract_backend, "pytesseract", fake_pytesseract())
    assert tesseract_backend.TesseractBackend().get_available_languages() == ["eng"]


def test_ocr_tesseract_failure_raises(monkeypatch):
    stub = fake_pytesseract()

    def failing_image_to_string(image, **kwargs):
        raise RuntimeError("Tesseract process timeout")

    stub.image_to_string = failing_image_to_string
    monkeypatch.setattr(tesseract_backend, "pytesseract", stub)

    with pytest.raises(OCRProcessingError):
        OCREngine().extract_text(Image.new("RGB", (20, 20)))


def test_ocr_batch_keeps_positions(monkeypatch, tmp_path):
    monkeypatch.setattr(tesseract_backend, "pytesseract", fake_pytesseract())
    broken = tmp_path / "broken.png"
    broken.write_bytes(b"not an image")

    texts = OCREngine().extract_text_batch([Image.new("L", (20, 20)), broken])

    assert texts == ["Time In 8:00am\nTime Out 5:00pm", ""]


def test_backend_info(monkeypatch):
    monkeypatch.setattr(tesseract_backend, "pytesseract", fake_pytesseract())

    info = OCREngine().get_backend_info()

    assert info['language'] == "eng"
    assert info['psm'] == 3
