# src/wg_builder/session.py
from __future__ import annotations
import logging
from typing import Optional

from .models import InterfaceSettings, ServerIdentity
from .registry import PeerRegistry
from .wireguard import render_session

log = logging.getLogger(__name__)


class ConfigSession:
    """
    État d'une session d'édition : registre des peers + paramètres
    d'interface. `config_text` est recalculé à chaque changement.
    """

    def __init__(
        self,
        registry: Optional[PeerRegistry] = None,
        settings: Optional[InterfaceSettings] = None,
    ):
        self.registry = registry if registry is not None else PeerRegistry()
        self.settings = settings if settings is not None else InterfaceSettings()
        self.config_text = ""
        self.registry.subscribe(self._on_registry_change)
        self.refresh()

    @property
    def server(self) -> ServerIdentity:
        return self.registry.server

    def _on_registry_change(self, registry: PeerRegistry) -> None:
        self.refresh()

    def refresh(self) -> str:
        self.config_text = render_session(self)
        log.debug("config re-rendered (%d peers)", len(self.registry))
        return self.config_text

    def update_interface(
        self,
        address: Optional[str] = None,
        listen_port: Optional[str] = None,
        interface: Optional[str] = None,
    ) -> None:
        if address is not None:
            self.settings.address = address
        if listen_port is not None:
            self.settings.listen_port = str(listen_port)
        if interface is not None:
            self.settings.interface = interface
        self.refresh()
