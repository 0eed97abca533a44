import io
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

import fitz
import pytest
from PIL import Image

from preview import generar_preview_png


def _pliego_pdf():
    doc = fitz.open()
    page = doc.new_page(width=1190.55, height=841.89)
    page.draw_rect(fitz.Rect(0, 0, 595, 841), color=(0, 0, 0), fill=(0, 0, 0))
    datos = doc.tobytes()
    doc.close()
    return datos


def test_preview_apaisado():
    png = generar_preview_png(_pliego_pdf(), 0, dpi=36)
    img = Image.open(io.BytesIO(png))
    assert img.format == "PNG"
    ancho, alto = img.size
    assert ancho > alto
    assert img.getpixel((5, 5)) == (0, 0, 0)
    assert img.getpixel((ancho - 5, 5)) == (255, 255, 255)


def test_preview_indice_invalido():
    with pytest.raises(IndexError):
        generar_preview_png(_pliego_pdf(), 1)
