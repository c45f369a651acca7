# src/wg_builder/state.py
from __future__ import annotations
import json
from pathlib import Path
from typing import Optional

from .config import DEFAULT_KEEPALIVE, get_state_path
from .models import InterfaceSettings, Peer, ServerIdentity
from .registry import PeerRegistry
from .session import ConfigSession


def session_to_dict(session: ConfigSession) -> dict:
    registry = session.registry
    return {
        "interface": {
            "address": session.settings.address,
            "listen_port": session.settings.listen_port,
            "interface": session.settings.interface,
        },
        "server": {
            "private_key": registry.server.private_key,
            "public_key": registry.server.public_key,
        },
        "peer_counter": registry.peer_counter,
        # liste : l'ordre de création doit être conservé
        "peers": [
            {
                "id": p.id,
                "name": p.name,
                "private_key": p.private_key,
                "public_key": p.public_key,
                "allowed_ips": p.allowed_ips,
                "endpoint": p.endpoint,
                "persistent_keepalive": p.persistent_keepalive,
                "enabled": p.enabled,
            }
            for p in registry.peers
        ],
    }


def dict_to_session(data: dict) -> ConfigSession:
    iface_data = data.get("interface", {})
    settings = InterfaceSettings(
        address=iface_data.get("address", InterfaceSettings.address),
        listen_port=str(iface_data.get("listen_port", InterfaceSettings.listen_port)),
        interface=iface_data.get("interface", InterfaceSettings.interface),
    )

    server_data = data.get("server", {})
    server = ServerIdentity(
        private_key=server_data.get("private_key", ""),
        public_key=server_data.get("public_key", ""),
    )

    peers = []
    for p in data.get("peers", []):
        peers.append(Peer(
            id=p["id"],
            name=p["name"],
            private_key=p.get("private_key", ""),
            public_key=p.get("public_key", ""),
            allowed_ips=p["allowed_ips"],
            endpoint=p.get("endpoint", ""),
            persistent_keepalive=p.get("persistent_keepalive", DEFAULT_KEEPALIVE),
            enabled=p.get("enabled", True),
        ))

    registry = PeerRegistry(
        peers=peers,
        peer_counter=data.get("peer_counter", 0),
        server=server,
    )
    return ConfigSession(registry=registry, settings=settings)


def load_session(path: Optional[Path] = None) -> ConfigSession:
    path = path or get_state_path()
    if not path.exists():
        raise FileNotFoundError(f"State file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    return dict_to_session(data)


def save_session(session: ConfigSession, path: Optional[Path] = None) -> Path:
    path = path or get_state_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    data = session_to_dict(session)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return path
