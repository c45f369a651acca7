"""Construction interactive d'une configuration WireGuard."""

__version__ = "0.1.0"

from .registry import PeerRegistry
from .session import ConfigSession
from .wireguard import render_config

__all__ = ["PeerRegistry", "ConfigSession", "render_config"]
