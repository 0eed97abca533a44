import logging
import os

from openai import OpenAI, OpenAIError

from imposicion_config import ImpositionSettings

logger = logging.getLogger(__name__)

RESPUESTA_VACIA = "No pude generar una respuesta."


class RemoteUnavailable(Exception):
    """El servicio de IA no está configurado o no respondió."""


def _instrucciones_sistema(ajustes: ImpositionSettings) -> str:
    return f"""
Sos un técnico de preimpresión especializado en juegos de mesa 'Print and Play'.
Ayudás a configurar la imposición de PDFs A4 en pliegos A3 para impresión a doble cara (dúplex).

Ajustes actuales de la herramienta:
- Formato de salida: A3 apaisado
- Desplazamiento X: {ajustes.x_offset_mm}mm
- Desplazamiento Y: {ajustes.y_offset_mm}mm
- Escala: {ajustes.scale * 100:g}%
- Medianil (separación): {ajustes.gutter_mm}mm
- Corrección dúplex (sólo dorso): {ajustes.duplex_correction}mm

Recomendaciones habituales:
1. Si la impresora corre la hoja al darla vuelta, corregir con el Desplazamiento X o la Corrección dúplex.
2. Imprimir un solo pliego de prueba antes del mazo completo.
3. Si frente y dorso no coinciden, medir el error con una regla en mm y cargar ese valor en los ajustes.

Respondé en español, de forma breve, técnica y amable.
"""


class AsesorImpresion:
    """Consejos de impresión vía OpenAI a partir de los ajustes actuales.

    El cliente se crea al primer uso; en tests se inyecta uno falso.
    """

    def __init__(self, client=None, model="gpt-4o", temperature=0.3):
        self._client = client
        self.model = model
        self.temperature = temperature

    def _obtener_cliente(self):
        if self._client is None:
            api_key = os.environ.get("OPENAI_API_KEY")
            if not api_key:
                raise RemoteUnavailable("API Key no encontrada. Configure OPENAI_API_KEY.")
            self._client = OpenAI(api_key=api_key)
        return self._client

    def advise(self, query: str, ajustes: ImpositionSettings, contexto: str = "") -> str:
        client = self._obtener_cliente()
        try:
            respuesta = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": _instrucciones_sistema(ajustes)},
                    {
                        "role": "user",
                        "content": f"Contexto adicional: {contexto}\n\nPregunta del usuario: {query}",
                    },
                ],
                temperature=self.temperature,
            )
        except OpenAIError as exc:
            logger.exception("Fallo consultando al asistente de impresión")
            raise RemoteUnavailable(
                "Hubo un error al conectar con el asistente de impresión."
            ) from exc

        contenido = respuesta.choices[0].message.content if respuesta.choices else None
        return (contenido or "").strip() or RESPUESTA_VACIA
