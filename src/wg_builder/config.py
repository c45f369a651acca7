# src/wg_builder/config.py
"""Valeurs par défaut et lecture de l'environnement."""
import os
from pathlib import Path

# Interface WireGuard par défaut
DEFAULT_ADDRESS = "10.0.0.1/24"
DEFAULT_PORT = 51820
DEFAULT_INTERFACE = "wg0"

# Peers
DEFAULT_KEEPALIVE = 25
PEER_NETWORK_PREFIX = "10.0.0."

MISSING_SERVER_KEY = "[Generate server keys first]"

# Export
EXPORT_FILENAME = "wg0.conf"
EXPORT_MIME_TYPE = "text/plain"

DEFAULT_STATE_PATH = Path("data/state.json")
DEFAULT_HTTP_PORT = 8080


def get_state_path() -> Path:
    """Chemin du fichier d'état (WG_BUILDER_STATE)."""
    value = os.environ.get("WG_BUILDER_STATE", "")
    return Path(value) if value else DEFAULT_STATE_PATH


def get_http_port() -> int:
    """Port d'écoute du serveur HTTP (PORT)."""
    return int(os.environ.get("PORT", DEFAULT_HTTP_PORT))


def get_http_host() -> str:
    return os.environ.get("HOST", "127.0.0.1")


def get_log_level() -> str:
    return os.environ.get("WG_BUILDER_LOG_LEVEL", "WARNING").upper()
