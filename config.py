import os


MAX_CONTENT_LENGTH = 32 * 1024 * 1024  # 32MB


def _env_bool(name: str, default: str = "false") -> bool:
    value = os.environ.get(name, default)
    if value is None:
        return False
    return value.lower() in {"1", "true", "yes", "y"}


# Recorta los ajustes recibidos por HTTP al rango del panel antes de imponer
IMPOSICION_LIMITAR_RANGOS = _env_bool("IMPOSICION_LIMITAR_RANGOS")

OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-4o")
OPENAI_TEMPERATURE = 0.3

PREVIEW_DPI = int(os.environ.get("PREVIEW_DPI", "110"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
