# src/wg_builder/registry.py
from __future__ import annotations
import logging
from typing import Callable, Iterator, List, Optional

from . import keys
from .config import DEFAULT_KEEPALIVE, PEER_NETWORK_PREFIX
from .models import Peer, PeerUpdate, ServerIdentity, apply_update, make_update

log = logging.getLogger(__name__)

Listener = Callable[["PeerRegistry"], None]


class PeerRegistry:
    """
    Liste ordonnée des peers + identité du serveur.

    Un id inconnu n'est jamais une erreur : l'opération ne fait rien
    et les listeners ne sont pas notifiés.
    """

    def __init__(
        self,
        peers: Optional[List[Peer]] = None,
        peer_counter: int = 0,
        server: Optional[ServerIdentity] = None,
    ):
        self._peers: List[Peer] = list(peers or [])
        # le compteur ne redescend jamais sous le plus grand id connu
        highest = max((p.id for p in self._peers), default=0)
        self.peer_counter = max(peer_counter, highest)
        self.server = server if server is not None else ServerIdentity()
        self._listeners: List[Listener] = []

    # ---------- Lecture ----------

    @property
    def peers(self) -> tuple[Peer, ...]:
        return tuple(self._peers)

    def get(self, peer_id: int) -> Optional[Peer]:
        return next((p for p in self._peers if p.id == peer_id), None)

    def __len__(self) -> int:
        return len(self._peers)

    def __iter__(self) -> Iterator[Peer]:
        return iter(self.peers)

    def __contains__(self, peer_id: object) -> bool:
        return self.get(peer_id) is not None

    # ---------- Notifications ----------

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _changed(self) -> None:
        for listener in self._listeners:
            listener(self)

    # ---------- Mutations ----------

    def add_peer(self) -> Peer:
        self.peer_counter += 1
        peer_id = self.peer_counter
        peer = Peer(
            id=peer_id,
            name=f"Peer {peer_id}",
            private_key="",
            public_key="",
            allowed_ips=f"{PEER_NETWORK_PREFIX}{peer_id + 1}/32",
            endpoint="",
            persistent_keepalive=DEFAULT_KEEPALIVE,
            enabled=True,
        )
        self._peers.append(peer)
        log.info("peer %d added (%s)", peer.id, peer.allowed_ips)
        self._changed()
        return peer

    def remove_peer(self, peer_id: int) -> None:
        remaining = [p for p in self._peers if p.id != peer_id]
        if len(remaining) == len(self._peers):
            log.debug("remove_peer: unknown id %s, ignored", peer_id)
            return
        self._peers = remaining
        log.info("peer %d removed", peer_id)
        self._changed()

    def generate_keys_for(self, peer_id: int) -> None:
        peer = self.get(peer_id)
        if peer is None:
            log.debug("generate_keys_for: unknown id %s, ignored", peer_id)
            return
        peer.private_key, peer.public_key = keys.generate_keypair()
        log.info("keys generated for peer %d", peer_id)
        self._changed()

    def update_peer(self, peer_id: int, update: PeerUpdate) -> None:
        peer = self.get(peer_id)
        if peer is None:
            log.debug("update_peer: unknown id %s, ignored", peer_id)
            return
        apply_update(peer, update)
        log.info("peer %d updated: %s", peer_id, type(update).__name__)
        self._changed()

    def update_field(self, peer_id: int, field: str, value) -> None:
        """
        Variante par nom de champ de update_peer().

        Lève ValueError si le champ n'existe pas (même si l'id est inconnu).
        """
        self.update_peer(peer_id, make_update(field, value))

    def toggle_enabled(self, peer_id: int) -> None:
        peer = self.get(peer_id)
        if peer is None:
            log.debug("toggle_enabled: unknown id %s, ignored", peer_id)
            return
        peer.enabled = not peer.enabled
        log.info("peer %d %s", peer_id, "enabled" if peer.enabled else "disabled")
        self._changed()

    def set_server_keys(self) -> ServerIdentity:
        # même instance pour toute la session
        self.server.private_key, self.server.public_key = keys.generate_keypair()
        log.info("server keys generated")
        self._changed()
        return self.server
