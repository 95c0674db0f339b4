# gate/config.py
import os
from pathlib import Path
from typing import Final

# ── Raíz del proyecto ───────────────────────────────────────
PROJECT_ROOT: Final = Path(__file__).resolve().parents[1]

# ── .env opcional (solo entornos de desarrollo) ─────────────
ENV_FILE = PROJECT_ROOT / ".env"
if ENV_FILE.exists():
    from dotenv import load_dotenv  # type: ignore  (solo dev)
    load_dotenv(ENV_FILE, override=False)

def _env(key: str, *, required: bool = False, default: str | None = None) -> str:
    """Helper para leer variables de entorno con validación opcional."""
    val = os.getenv(key, default)
    if val is None and required:
        raise RuntimeError(f"Falta la variable de entorno obligatoria: {key}")
    return val

def _env_int(key: str, default: int) -> int:
    raw = _env(key, default=str(default))
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"La variable {key} debe ser un entero, llegó {raw!r}") from None


# ── Sesión ──────────────────────────────────────────────────
FLASK_SECRET = _env("FLASK_SECRET") or _env("SECRET_KEY")

# ── Autenticación YouTube (cliente OAuth de Google) ─────────
YOUTUBE_CLIENT_ID     = _env("YOUTUBE_APP_ID")
YOUTUBE_CLIENT_SECRET = _env("YOUTUBE_APP_SECRET")

# Si no existen en variables de entorno => intentamos en credentials.json
if not (YOUTUBE_CLIENT_ID and YOUTUBE_CLIENT_SECRET):
    import json
    cred_path = PROJECT_ROOT / _env("GOOGLE_CREDENTIALS_FILE", default="credentials.json")
    if cred_path.exists():
        with open(cred_path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
            YOUTUBE_CLIENT_ID     = data.get("web", {}).get("client_id")     or YOUTUBE_CLIENT_ID
            YOUTUBE_CLIENT_SECRET = data.get("web", {}).get("client_secret") or YOUTUBE_CLIENT_SECRET

# ── Autenticación GitHub ────────────────────────────────────
GITHUB_CLIENT_ID     = _env("GITHUB_CLIENT_ID")
GITHUB_CLIENT_SECRET = _env("GITHUB_CLIENT_SECRET")

# ── Relaciones exigidas ─────────────────────────────────────
REQUIRED_CHANNEL_ID: str  = _env("REQUIRED_CHANNEL_ID", default="UCgIzTPYitha6idOdrr7M8sQ")
REQUIRED_GITHUB_USER: str = _env("REQUIRED_GITHUB_USER", default="bytemait")
# 0 => recorrer todas las páginas de suscripciones
YOUTUBE_MAX_PAGES: int    = _env_int("YOUTUBE_MAX_PAGES", 1)
HTTP_TIMEOUT: int         = _env_int("HTTP_TIMEOUT", 10)

# ── Servidor ────────────────────────────────────────────────
PORT: int         = _env_int("PORT", 3000)
LOG_LEVEL: str    = _env("LOG_LEVEL", default="INFO")
CORS_ORIGINS: list[str] = [
    o.strip() for o in _env("CORS_ORIGINS", default="*").split(",") if o.strip()
]

# ── Exportables ─────────────────────────────────────────────
__all__ = [
    "FLASK_SECRET",
    "YOUTUBE_CLIENT_ID", "YOUTUBE_CLIENT_SECRET",
    "GITHUB_CLIENT_ID", "GITHUB_CLIENT_SECRET",
    "REQUIRED_CHANNEL_ID", "REQUIRED_GITHUB_USER",
    "YOUTUBE_MAX_PAGES", "HTTP_TIMEOUT",
    "PORT", "LOG_LEVEL", "CORS_ORIGINS",
]
