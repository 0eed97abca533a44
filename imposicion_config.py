"""Ajustes de calibración para la imposición A4 → A3 dúplex."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Tuple

__all__ = [
    "ImpositionSettings",
    "AJUSTES_INICIALES",
    "RANGOS_UI",
]

# Rango (mínimo, máximo, paso) de cada control del panel de calibración
RANGOS_UI: Mapping[str, Tuple[float, float, float]] = {
    "x_offset_mm": (-50.0, 50.0, 0.5),
    "y_offset_mm": (-50.0, 50.0, 0.5),
    "gutter_mm": (0.0, 20.0, 1.0),
    "scale": (0.8, 1.2, 0.01),
    "duplex_correction": (-20.0, 20.0, 0.5),
}

_CLAVES_CAMEL = {
    "xOffsetMm": "x_offset_mm",
    "yOffsetMm": "y_offset_mm",
    "gutterMm": "gutter_mm",
    "scale": "scale",
    "duplexCorrection": "duplex_correction",
    "drawCenterLine": "draw_center_line",
}

_VERDADEROS = {"1", "true", "yes", "y", "on", "si", "sí"}


def _a_float(nombre: str, valor: Any) -> float:
    if isinstance(valor, bool):
        raise ValueError(f"Valor numérico inválido para {nombre}: {valor!r}")
    try:
        return float(valor)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Valor numérico inválido para {nombre}: {valor!r}") from exc


def _a_bool(valor: Any) -> bool:
    if isinstance(valor, bool):
        return valor
    if valor is None:
        return False
    return str(valor).strip().lower() in _VERDADEROS


@dataclass(frozen=True)
class ImpositionSettings:
    """Calibración de una corrida de imposición.

    Las longitudes están en milímetros; la conversión a puntos ocurre sólo en
    ``colocacion`` mediante ``utils_geom.mm_to_pt``.
    """

    x_offset_mm: float = 0.0
    y_offset_mm: float = 0.0
    gutter_mm: float = 0.0
    scale: float = 1.0
    duplex_correction: float = 0.0
    draw_center_line: bool = True

    def con(self, **overrides: Any) -> "ImpositionSettings":
        """Devuelve una copia con los campos indicados reemplazados."""

        return replace(self, **overrides)

    def limitar(self) -> "ImpositionSettings":
        """Copia con cada valor numérico recortado al rango del panel."""

        params: Dict[str, float] = {}
        for campo, (minimo, maximo, _paso) in RANGOS_UI.items():
            valor = getattr(self, campo)
            params[campo] = min(max(valor, minimo), maximo)
        return replace(self, **params)

    def to_dict(self) -> Dict[str, float | bool]:
        return {
            "xOffsetMm": self.x_offset_mm,
            "yOffsetMm": self.y_offset_mm,
            "gutterMm": self.gutter_mm,
            "scale": self.scale,
            "duplexCorrection": self.duplex_correction,
            "drawCenterLine": self.draw_center_line,
        }

    @classmethod
    def desde_dict(cls, datos: Mapping[str, Any] | None) -> "ImpositionSettings":
        """Construye los ajustes desde un formulario o JSON.

        Acepta claves camelCase (como las envía el panel web) o snake_case.
        Las claves ausentes o vacías toman el valor por defecto.
        """

        params: Dict[str, Any] = {}
        for clave, valor in (datos or {}).items():
            campo = _CLAVES_CAMEL.get(clave, clave)
            if campo not in _CAMPOS or valor is None or valor == "":
                continue
            if campo == "draw_center_line":
                params[campo] = _a_bool(valor)
            else:
                params[campo] = _a_float(campo, valor)
        return cls(**params)


_CAMPOS = set(_CLAVES_CAMEL.values())

AJUSTES_INICIALES = ImpositionSettings()
