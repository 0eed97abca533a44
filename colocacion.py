from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from imposicion_config import ImpositionSettings
from utils_geom import mm_to_pt


class Slot(Enum):
    IZQUIERDA = "left"
    DERECHA = "right"


@dataclass(frozen=True)
class Colocacion:
    """Caja de dibujo en puntos, con origen abajo-izquierda como en PDF."""

    x: float
    y: float
    ancho: float
    alto: float

    @property
    def vacia(self) -> bool:
        return self.ancho == 0 or self.alto == 0

    @property
    def invertida(self) -> bool:
        return self.ancho < 0 and self.alto < 0

    def normalizada(self) -> Colocacion:
        """Misma caja con ancho y alto positivos (escala negativa = giro de 180°)."""
        x0, x1 = sorted((self.x, self.x + self.ancho))
        y0, y1 = sorted((self.y, self.y + self.alto))
        return Colocacion(x=x0, y=y0, ancho=x1 - x0, alto=y1 - y0)


def centro_slot(ancho_hoja: float, alto_hoja: float, slot: Slot) -> tuple[float, float]:
    mitad = ancho_hoja / 2
    if slot is Slot.IZQUIERDA:
        cx = mitad / 2
    else:
        cx = mitad + mitad / 2
    return cx, alto_hoja / 2


def calcular_colocacion(
    ancho_hoja: float,
    alto_hoja: float,
    ancho_pagina: float,
    alto_pagina: float,
    slot: Slot,
    ajustes: ImpositionSettings,
    es_dorso: bool,
) -> Colocacion:
    """Posición y tamaño de una página A4 dentro de un slot del pliego A3.

    La página se centra en su mitad del pliego, se escala de forma uniforme y
    se desplaza por los offsets globales. El medianil empuja ambas mitades
    hacia afuera del eje central y la corrección dúplex sólo afecta al dorso.
    No se recorta ni se valida contra los bordes del pliego.
    """
    cx, cy = centro_slot(ancho_hoja, alto_hoja, slot)

    ancho = ancho_pagina * ajustes.scale
    alto = alto_pagina * ajustes.scale

    offset_x = mm_to_pt(ajustes.x_offset_mm)
    offset_y = mm_to_pt(ajustes.y_offset_mm)
    medianil = mm_to_pt(ajustes.gutter_mm)

    if es_dorso:
        offset_x += mm_to_pt(ajustes.duplex_correction)

    if slot is Slot.IZQUIERDA:
        desplazamiento_medianil = -(medianil / 2)
    else:
        desplazamiento_medianil = medianil / 2

    x = cx - ancho / 2 + offset_x + desplazamiento_medianil
    y = cy - alto / 2 + offset_y
    return Colocacion(x=x, y=y, ancho=ancho, alto=alto)


def posicion_guia(ancho_hoja: float, ajustes: ImpositionSettings, es_dorso: bool) -> float:
    """X de la línea de registro central.

    En el dorso la guía sigue a las páginas corregidas: se suma la corrección
    dúplex al offset X, igual que en ``calcular_colocacion``.
    """
    offset_mm = ajustes.x_offset_mm
    if es_dorso:
        offset_mm += ajustes.duplex_correction
    return ancho_hoja / 2 + mm_to_pt(offset_mm)
