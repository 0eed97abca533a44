import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))
sys.path.append(str(Path(__file__).resolve().parents[1] / "tools"))

import fitz
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

import imponer_cli


def _crear_pdf(path, paginas):
    c = canvas.Canvas(str(path), pagesize=A4)
    for i in range(paginas):
        c.drawString(10, 10, f"p{i}")
        c.showPage()
    c.save()


def test_cli_genera_pliegos(tmp_path, capsys):
    entrada = tmp_path / "entrada.pdf"
    salida = tmp_path / "salida.pdf"
    _crear_pdf(entrada, 6)

    codigo = imponer_cli.main(
        [str(entrada), str(salida), "--x-offset", "1.5", "--duplex", "-0.5", "--sin-guias"]
    )

    assert codigo == 0
    assert "4 pliegos" in capsys.readouterr().out
    with fitz.open(str(salida)) as doc:
        assert doc.page_count == 4
        assert "FRENTE" not in doc[0].get_text()


def test_cli_pdf_invalido(tmp_path, capsys):
    entrada = tmp_path / "roto.pdf"
    entrada.write_bytes(b"%PDF-roto")

    codigo = imponer_cli.main([str(entrada), str(tmp_path / "salida.pdf")])

    assert codigo == 1
    assert "[ERROR]" in capsys.readouterr().err
    assert not (tmp_path / "salida.pdf").exists()
