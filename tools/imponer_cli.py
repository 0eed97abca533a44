#!/usr/bin/env python3
"""Imposición A4 → A3 dúplex desde la línea de comandos."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

sys.path.append(str(Path(__file__).resolve().parents[1]))

from imposicion_config import AJUSTES_INICIALES  # noqa: E402
from montaje import DocumentLoadError, imponer_archivo  # noqa: E402


def construir_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Imposición A4 a A3 para impresión dúplex")
    parser.add_argument("entrada", type=Path, help="PDF A4 en orden frente, dorso, frente, dorso...")
    parser.add_argument("salida", type=Path, help="PDF A3 resultante")
    parser.add_argument("--x-offset", type=float, default=AJUSTES_INICIALES.x_offset_mm, help="Desplazamiento X en mm")
    parser.add_argument("--y-offset", type=float, default=AJUSTES_INICIALES.y_offset_mm, help="Desplazamiento Y en mm")
    parser.add_argument("--gutter", type=float, default=AJUSTES_INICIALES.gutter_mm, help="Medianil en mm")
    parser.add_argument("--scale", type=float, default=AJUSTES_INICIALES.scale, help="Escala (1.0 = 100%%)")
    parser.add_argument("--duplex", type=float, default=AJUSTES_INICIALES.duplex_correction, help="Corrección dúplex en mm (sólo dorso)")
    parser.add_argument("--sin-guias", action="store_true", help="No dibujar línea central ni etiquetas")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = construir_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ajustes = AJUSTES_INICIALES.con(
        x_offset_mm=args.x_offset,
        y_offset_mm=args.y_offset,
        gutter_mm=args.gutter,
        scale=args.scale,
        duplex_correction=args.duplex,
        draw_center_line=not args.sin_guias,
    )
    try:
        pliegos = imponer_archivo(str(args.entrada), str(args.salida), ajustes)
    except DocumentLoadError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    print(f"{args.salida}: {pliegos} pliegos A3")
    return 0


if __name__ == "__main__":
    sys.exit(main())
