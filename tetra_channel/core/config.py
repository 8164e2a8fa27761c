# tetra_channel/core/config.py

from dotenv import load_dotenv
import os

load_dotenv()

# Base fixe de l'API Tetra Channel (non configurable)
TETRIO_BASE_URL = "https://ch.tetr.io/"

DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "tetra-channel-python"


def get_http_timeout() -> float:
    raw = os.getenv("TETRIO_HTTP_TIMEOUT")
    if raw is None or not raw.strip():
        return DEFAULT_HTTP_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise RuntimeError(f"TETRIO_HTTP_TIMEOUT invalide : '{raw}' (nombre de secondes attendu).")
    if timeout <= 0:
        raise RuntimeError(f"TETRIO_HTTP_TIMEOUT invalide : {timeout} (doit être strictement positif).")
    return timeout


def get_user_agent() -> str:
    return os.getenv("TETRIO_USER_AGENT") or DEFAULT_USER_AGENT
