import io

import fitz  # PyMuPDF
from PIL import Image


def generar_preview_png(pdf_bytes: bytes, indice: int = 0, dpi: int = 110) -> bytes:
    """Rasteriza un pliego del PDF impuesto y lo devuelve como PNG."""
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        if not 0 <= indice < doc.page_count:
            raise IndexError(f"Pliego fuera de rango: {indice} (total {doc.page_count})")
        zoom = dpi / 72.0
        pix = doc[indice].get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)

    img = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()
