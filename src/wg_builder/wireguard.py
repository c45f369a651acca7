# src/wg_builder/wireguard.py
from __future__ import annotations
from typing import Iterable, TYPE_CHECKING

from .config import MISSING_SERVER_KEY
from .models import Peer, ServerIdentity

if TYPE_CHECKING:
    from .session import ConfigSession


# ---------- Rendu de la config ----------

def render_config(
    server: ServerIdentity,
    address: str,
    listen_port: str,
    interface_name: str,
    peers: Iterable[Peer],
) -> str:
    """
    Rend l'état serveur + peers en texte wg-quick.

    Seuls les peers actifs ayant une clé publique sont émis, dans l'ordre
    reçu. `interface_name` n'apparaît pas dans le texte : il ne sert
    qu'au nom du fichier côté appelant.
    """
    lines = [
        "[Interface]",
        f"Address = {address}",
        f"PrivateKey = {server.private_key or MISSING_SERVER_KEY}",
        f"ListenPort = {listen_port}",
        "",  # blank line
    ]

    for p in peers:
        if not (p.enabled and p.public_key):
            continue
        lines.append("[Peer]")
        lines.append(f"# {p.name}")
        lines.append(f"PublicKey = {p.public_key}")
        lines.append(f"AllowedIPs = {p.allowed_ips}")
        if p.endpoint:
            lines.append(f"Endpoint = {p.endpoint}")
        if p.persistent_keepalive > 0:
            lines.append(f"PersistentKeepalive = {p.persistent_keepalive}")
        lines.append("")  # blank

    # chaque ligne se termine par "\n", y compris la dernière ligne vide
    return "".join(line + "\n" for line in lines)


def render_session(session: ConfigSession) -> str:
    s = session.settings
    return render_config(
        session.server,
        s.address,
        s.listen_port,
        s.interface,
        session.registry.peers,
    )
