import io
import json

from flask import Blueprint, current_app, jsonify, request, send_file
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.utils import secure_filename

from ia_sugerencias import AsesorImpresion, RemoteUnavailable
from imposicion_config import AJUSTES_INICIALES, RANGOS_UI, ImpositionSettings
from montaje import DocumentLoadError, procesar_pdf
from preview import generar_preview_png

routes_bp = Blueprint("routes", __name__)


def _json_error(msg, code=422):
    return jsonify(ok=False, error=msg), code


@routes_bp.app_errorhandler(RequestEntityTooLarge)
def _too_large(e):
    return _json_error("Payload demasiado grande. Reduce el tamaño del PDF.", 413)


def _asesor() -> AsesorImpresion:
    asesor = current_app.extensions.get("asesor_impresion")
    if asesor is None:
        asesor = AsesorImpresion(
            model=current_app.config.get("OPENAI_MODEL", "gpt-4o"),
            temperature=current_app.config.get("OPENAI_TEMPERATURE", 0.3),
        )
        current_app.extensions["asesor_impresion"] = asesor
    return asesor


def _ajustes_desde_request(req) -> ImpositionSettings:
    crudo = req.form.get("ajustes")
    datos = json.loads(crudo) if crudo else req.form.to_dict()
    if not isinstance(datos, dict):
        raise ValueError("'ajustes' debe ser un objeto.")

    ajustes = ImpositionSettings.desde_dict(datos)
    if current_app.config.get("IMPOSICION_LIMITAR_RANGOS", False):
        ajustes = ajustes.limitar()
    return ajustes


def _leer_pdf_subido():
    archivo = request.files.get("pdf")
    if not archivo or archivo.filename == "":
        return None, None
    nombre = secure_filename(archivo.filename) or "documento.pdf"
    return nombre, archivo.read()


@routes_bp.route("/api/ajustes", methods=["GET"])
def ajustes_por_defecto():
    rangos = {
        campo: {"min": minimo, "max": maximo, "step": paso}
        for campo, (minimo, maximo, paso) in RANGOS_UI.items()
    }
    return jsonify(ok=True, ajustes=AJUSTES_INICIALES.to_dict(), rangos=rangos)


@routes_bp.route("/imponer", methods=["POST"])
def imponer_pdf():
    nombre, datos = _leer_pdf_subido()
    if datos is None:
        return _json_error("Debes subir un archivo PDF válido.", 400)
    try:
        ajustes = _ajustes_desde_request(request)
    except ValueError as e:
        return _json_error(str(e))

    try:
        resultado = procesar_pdf(nombre, datos, ajustes)
    except DocumentLoadError as e:
        current_app.logger.warning("No se pudo abrir %s: %s", nombre, e.__cause__ or e)
        return _json_error(str(e))

    resp = send_file(
        io.BytesIO(resultado.pdf_bytes),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=resultado.nombre_descarga,
    )
    resp.headers["X-Pliegos"] = str(resultado.pliegos)
    return resp


@routes_bp.route("/imponer/preview", methods=["POST"])
def imponer_preview():
    nombre, datos = _leer_pdf_subido()
    if datos is None:
        return _json_error("Debes subir un archivo PDF válido.", 400)
    try:
        ajustes = _ajustes_desde_request(request)
        pagina = int(request.form.get("pagina", 0) or 0)
    except ValueError as e:
        return _json_error(str(e))

    try:
        resultado = procesar_pdf(nombre, datos, ajustes)
        png = generar_preview_png(
            resultado.pdf_bytes, pagina, dpi=current_app.config.get("PREVIEW_DPI", 110)
        )
    except DocumentLoadError as e:
        return _json_error(str(e))
    except IndexError as e:
        return _json_error(str(e))

    return send_file(io.BytesIO(png), mimetype="image/png")


@routes_bp.route("/api/asistente", methods=["POST"])
def asistente():
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return _json_error("Se esperaba un objeto JSON.", 400)
    pregunta = payload.get("pregunta") or ""
    if not isinstance(pregunta, str) or not pregunta.strip():
        return _json_error("La pregunta no puede estar vacía.", 400)
    datos_ajustes = payload.get("ajustes") or {}
    if not isinstance(datos_ajustes, dict):
        return _json_error("'ajustes' debe ser un objeto.", 400)
    contexto = payload.get("contexto") or ""
    if not isinstance(contexto, str):
        return _json_error("'contexto' debe ser texto.", 400)
    try:
        ajustes = ImpositionSettings.desde_dict(datos_ajustes)
    except ValueError as e:
        return _json_error(str(e))

    try:
        respuesta = _asesor().advise(pregunta.strip(), ajustes, contexto)
    except RemoteUnavailable as e:
        current_app.logger.warning("Asistente no disponible: %s", e)
        return _json_error(str(e), 503)
    return jsonify(ok=True, respuesta=respuesta)
