
# src/wg_builder/models.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Union

from .config import DEFAULT_ADDRESS, DEFAULT_INTERFACE, DEFAULT_PORT


@dataclass
class ServerIdentity:
    private_key: str = ""
    public_key: str = ""


@dataclass
class InterfaceSettings:
    address: str = DEFAULT_ADDRESS           # ex "10.0.0.1/24"
    listen_port: str = str(DEFAULT_PORT)     # texte tel que saisi, ex "51820"
    interface: str = DEFAULT_INTERFACE       # ex "wg0"


@dataclass
class Peer:
    id: int
    name: str
    private_key: str
    public_key: str
    allowed_ips: str                 # ex "10.0.0.2/32"
    endpoint: str = ""               # host:port, optionnel
    persistent_keepalive: int = 25   # 0 = désactivé
    enabled: bool = True


# ---------- Mises à jour d'un peer ----------
# Un type par champ modifiable : pas d'écriture par nom d'attribut.

@dataclass(frozen=True)
class SetName:
    value: str


@dataclass(frozen=True)
class SetPrivateKey:
    value: str


@dataclass(frozen=True)
class SetPublicKey:
    value: str


@dataclass(frozen=True)
class SetAllowedIPs:
    value: str


@dataclass(frozen=True)
class SetEndpoint:
    value: str


@dataclass(frozen=True)
class SetPersistentKeepalive:
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"PersistentKeepalive must be an integer, got {self.value!r}")
        if self.value < 0:
            raise ValueError(f"PersistentKeepalive must be >= 0, got {self.value}")


@dataclass(frozen=True)
class SetEnabled:
    value: bool


PeerUpdate = Union[
    SetName,
    SetPrivateKey,
    SetPublicKey,
    SetAllowedIPs,
    SetEndpoint,
    SetPersistentKeepalive,
    SetEnabled,
]

# Noms acceptés par update_field() -> variante correspondante.
# Les deux orthographes (camelCase et snake_case) sont admises.
FIELD_UPDATES = {
    "name": SetName,
    "privateKey": SetPrivateKey,
    "private_key": SetPrivateKey,
    "publicKey": SetPublicKey,
    "public_key": SetPublicKey,
    "allowedIPs": SetAllowedIPs,
    "allowed_ips": SetAllowedIPs,
    "endpoint": SetEndpoint,
    "persistentKeepalive": SetPersistentKeepalive,
    "persistent_keepalive": SetPersistentKeepalive,
    "enabled": SetEnabled,
}


def make_update(field: str, value) -> PeerUpdate:
    try:
        cls = FIELD_UPDATES[field]
    except KeyError:
        raise ValueError(f"Unknown peer field '{field}'") from None
    return cls(value)


def apply_update(peer: Peer, update: PeerUpdate) -> None:
    if isinstance(update, SetName):
        peer.name = update.value
    elif isinstance(update, SetPrivateKey):
        peer.private_key = update.value
    elif isinstance(update, SetPublicKey):
        peer.public_key = update.value
    elif isinstance(update, SetAllowedIPs):
        peer.allowed_ips = update.value
    elif isinstance(update, SetEndpoint):
        peer.endpoint = update.value
    elif isinstance(update, SetPersistentKeepalive):
        peer.persistent_keepalive = update.value
    elif isinstance(update, SetEnabled):
        peer.enabled = bool(update.value)
    else:
        raise TypeError(f"Unsupported peer update: {update!r}")
