import fitz

# 1 mm = 72 / 25.4 pt, redondeado al valor que usa la calibración de la herramienta
MM_TO_PT = 2.83465


def mm_to_pt(mm: float) -> float:
    return mm * MM_TO_PT


def pt_to_mm(pt: float) -> float:
    return pt / MM_TO_PT


def rect_desde_origen_inferior(x: float, y: float, ancho: float, alto: float, alto_hoja: float) -> fitz.Rect:
    """Convierte una caja con origen abajo-izquierda (PDF) a ``fitz.Rect``.

    PyMuPDF trabaja con el origen arriba-izquierda, así que el eje Y se invierte
    respecto al alto de la hoja.
    """
    return fitz.Rect(x, alto_hoja - y - alto, x + ancho, alto_hoja - y)


def punto_desde_origen_inferior(x: float, y: float, alto_hoja: float) -> fitz.Point:
    return fitz.Point(x, alto_hoja - y)
