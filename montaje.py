from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import fitz  # PyMuPDF

from colocacion import Colocacion, Slot, calcular_colocacion, posicion_guia
from imposicion_config import ImpositionSettings
from utils_geom import punto_desde_origen_inferior, rect_desde_origen_inferior

logger = logging.getLogger(__name__)

# A3 apaisado en puntos: dos A4 (595.28 x 841.89) lado a lado
ANCHO_PLIEGO_PT = 1190.55
ALTO_PLIEGO_PT = 841.89

PAGINAS_POR_LOTE = 4

COLOR_GUIA = (0.7, 0.7, 0.7)
COLOR_ETIQUETA = (0.5, 0.5, 0.5)
OPACIDAD_GUIA = 0.5
TRAZO_GUIA = "[5 5] 0"

MENSAJE_ERROR_CARGA = (
    "Error procesando el PDF. Asegúrate de que no esté protegido con contraseña."
)


class DocumentLoadError(Exception):
    """El PDF de origen no se puede abrir (dañado, vacío o con contraseña)."""


class Cara(Enum):
    FRENTE = "FRENTE"
    DORSO = "DORSO"


@dataclass(frozen=True)
class Lote:
    """Cuatro páginas consecutivas: frente A, dorso A, frente B, dorso B.

    ``frente_a`` siempre existe; el resto es ``None`` cuando el documento
    termina antes de completar el lote.
    """

    frente_a: int
    dorso_a: Optional[int] = None
    frente_b: Optional[int] = None
    dorso_b: Optional[int] = None

    @property
    def tiene_dorso(self) -> bool:
        return self.dorso_a is not None or self.dorso_b is not None


@dataclass(frozen=True)
class Pliego:
    cara: Cara
    izquierda: Optional[int]
    derecha: Optional[int]

    @property
    def es_dorso(self) -> bool:
        return self.cara is Cara.DORSO


@dataclass
class ResultadoImposicion:
    nombre_original: str
    pdf_bytes: bytes
    paginas_origen: int
    pliegos: int

    @property
    def nombre_descarga(self) -> str:
        return f"imposition-{self.nombre_original or 'result.pdf'}"


def agrupar_lotes(total_paginas: int) -> List[Lote]:
    def _indice(i: int) -> Optional[int]:
        return i if i < total_paginas else None

    lotes = []
    for i in range(0, total_paginas, PAGINAS_POR_LOTE):
        lotes.append(
            Lote(
                frente_a=i,
                dorso_a=_indice(i + 1),
                frente_b=_indice(i + 2),
                dorso_b=_indice(i + 3),
            )
        )
    return lotes


def planificar_pliegos(total_paginas: int) -> List[Pliego]:
    """Secuencia de pliegos A3 para un documento de ``total_paginas`` A4.

    Cada lote produce un frente (A a la izquierda, B a la derecha) y, si tiene
    alguna página de dorso, un dorso con las posiciones invertidas: el dorso B
    va a la izquierda y el dorso A a la derecha, de modo que al dar vuelta la
    hoja y cortarla por el centro cada dorso queda detrás de su frente.
    """
    pliegos: List[Pliego] = []
    for lote in agrupar_lotes(total_paginas):
        pliegos.append(Pliego(Cara.FRENTE, izquierda=lote.frente_a, derecha=lote.frente_b))
        if lote.tiene_dorso:
            pliegos.append(Pliego(Cara.DORSO, izquierda=lote.dorso_b, derecha=lote.dorso_a))
    return pliegos


def contar_pliegos(total_paginas: int) -> int:
    return len(planificar_pliegos(total_paginas))


def dibujar_pagina_en_slot(
    hoja: fitz.Page,
    origen: fitz.Document,
    indice: Optional[int],
    slot: Slot,
    ajustes: ImpositionSettings,
    es_dorso: bool,
) -> Optional[Colocacion]:
    if indice is None:
        return None

    pagina = origen[indice]
    hoja_rect = hoja.rect
    colocacion = calcular_colocacion(
        hoja_rect.width,
        hoja_rect.height,
        pagina.rect.width,
        pagina.rect.height,
        slot,
        ajustes,
        es_dorso,
    )
    if colocacion.vacia:
        logger.warning(
            "Página %d sin área visible (escala %s); se omite", indice + 1, ajustes.scale
        )
        return colocacion

    caja = colocacion.normalizada()
    rect = rect_desde_origen_inferior(caja.x, caja.y, caja.ancho, caja.alto, hoja_rect.height)
    hoja.show_pdf_page(rect, origen, indice, rotate=180 if colocacion.invertida else 0)
    logger.debug(
        "Página %d -> %s x=%.2f y=%.2f w=%.2f h=%.2f",
        indice + 1,
        slot.value,
        colocacion.x,
        colocacion.y,
        colocacion.ancho,
        colocacion.alto,
    )
    return colocacion


def dibujar_guias(hoja: fitz.Page, ajustes: ImpositionSettings, cara: Cara) -> None:
    """Línea de corte punteada y etiqueta de cara en la esquina inferior izquierda."""
    ancho, alto = hoja.rect.width, hoja.rect.height
    x = posicion_guia(ancho, ajustes, cara is Cara.DORSO)
    hoja.draw_line(
        fitz.Point(x, 0),
        fitz.Point(x, alto),
        color=COLOR_GUIA,
        width=1,
        dashes=TRAZO_GUIA,
        stroke_opacity=OPACIDAD_GUIA,
    )
    hoja.insert_text(
        punto_desde_origen_inferior(10, 10, alto),
        cara.value,
        fontname="helv",
        fontsize=8,
        color=COLOR_ETIQUETA,
    )


def abrir_documento(datos: bytes) -> fitz.Document:
    try:
        doc = fitz.open(stream=datos, filetype="pdf")
    except (RuntimeError, ValueError) as exc:
        # fitz.FileDataError / EmptyFileError heredan de RuntimeError
        raise DocumentLoadError(MENSAJE_ERROR_CARGA) from exc

    if doc.needs_pass:
        doc.close()
        raise DocumentLoadError(MENSAJE_ERROR_CARGA)
    if doc.page_count == 0:
        doc.close()
        logger.warning("El PDF no contiene páginas")
        raise DocumentLoadError(MENSAJE_ERROR_CARGA)
    return doc


def _componer(origen: fitz.Document, ajustes: ImpositionSettings) -> Tuple[bytes, int]:
    plan = planificar_pliegos(origen.page_count)
    with fitz.open() as salida:
        for pliego in plan:
            hoja = salida.new_page(width=ANCHO_PLIEGO_PT, height=ALTO_PLIEGO_PT)
            dibujar_pagina_en_slot(
                hoja, origen, pliego.izquierda, Slot.IZQUIERDA, ajustes, pliego.es_dorso
            )
            dibujar_pagina_en_slot(
                hoja, origen, pliego.derecha, Slot.DERECHA, ajustes, pliego.es_dorso
            )
            if ajustes.draw_center_line:
                dibujar_guias(hoja, ajustes, pliego.cara)
        datos = salida.tobytes()
    return datos, len(plan)


def _imponer_datos(datos: bytes, ajustes: ImpositionSettings) -> Tuple[bytes, int, int]:
    with abrir_documento(datos) as origen:
        paginas = origen.page_count
        salida, pliegos = _componer(origen, ajustes)
    return salida, paginas, pliegos


def imponer(datos: bytes, ajustes: ImpositionSettings) -> bytes:
    """Convierte un PDF A4 (frente, dorso, frente, dorso...) en pliegos A3 dúplex.

    Lanza ``DocumentLoadError`` si el PDF no se puede abrir; en ese caso no se
    genera ningún pliego.
    """
    salida, paginas, pliegos = _imponer_datos(datos, ajustes)
    logger.info("%d páginas A4 -> %d pliegos A3", paginas, pliegos)
    return salida


def procesar_pdf(nombre: str, datos: bytes, ajustes: ImpositionSettings) -> ResultadoImposicion:
    salida, paginas, pliegos = _imponer_datos(datos, ajustes)
    logger.info("%s: %d páginas A4 -> %d pliegos A3", nombre, paginas, pliegos)
    return ResultadoImposicion(
        nombre_original=nombre,
        pdf_bytes=salida,
        paginas_origen=paginas,
        pliegos=pliegos,
    )


def imponer_archivo(input_path: str, output_path: str, ajustes: ImpositionSettings) -> int:
    """Variante sobre rutas de archivo; devuelve la cantidad de pliegos."""
    with open(input_path, "rb") as f:
        datos = f.read()
    resultado = procesar_pdf(os.path.basename(input_path), datos, ajustes)
    with open(output_path, "wb") as f:
        f.write(resultado.pdf_bytes)
    return resultado.pliegos
