import argparse
import logging
import sys
from pathlib import Path

from wg_builder.config import (
    DEFAULT_ADDRESS,
    DEFAULT_INTERFACE,
    DEFAULT_PORT,
    get_log_level,
    get_state_path,
)
from wg_builder.export import (
    ClipboardError,
    NothingToCopyError,
    NothingToExportError,
    copy_to_clipboard,
    export_config,
    export_qr,
)
from wg_builder.models import InterfaceSettings, SetName
from wg_builder.server import serve
from wg_builder.session import ConfigSession
from wg_builder.state import load_session, save_session


# champ CLI -> nom de champ du peer
SET_FIELDS = {
    "name": "name",
    "private-key": "private_key",
    "allowed-ips": "allowed_ips",
    "endpoint": "endpoint",
    "keepalive": "persistent_keepalive",
}

COPY_TARGETS = ["server-private", "server-public", "peer-private", "peer-public", "config"]


def _state_path(args) -> Path:
    return Path(args.state) if args.state else get_state_path()


def _load(args):
    try:
        return load_session(_state_path(args))
    except FileNotFoundError:
        print(f"[ERREUR] Aucun état trouvé ({_state_path(args)}).")
        print("    Lance d'abord : wg-builder init")
        return None


def _save(args, session: ConfigSession) -> None:
    save_session(session, _state_path(args))


def _unknown_peer(session: ConfigSession, peer_id: int) -> bool:
    if peer_id in session.registry:
        return False
    print(f"[!] Aucun peer avec l'id {peer_id}, rien n'a changé.")
    return True


# ---------------------------------------------------
# Commande : init
# ---------------------------------------------------

def cmd_init(args):
    path = _state_path(args)
    if path.exists() and not args.force:
        print(f"[ERREUR] {path} existe déjà (utilise --force pour repartir de zéro).")
        return 1

    settings = InterfaceSettings(
        address=args.address,
        listen_port=str(args.port),
        interface=args.interface,
    )
    session = ConfigSession(settings=settings)
    _save(args, session)

    print("[+] Session initialisée.")
    print("[+] Adresse :", settings.address)
    print(f"[+] Fichier {path} créé.")
    return 0


# ---------------------------------------------------
# Commande : server-keys
# ---------------------------------------------------

def cmd_server_keys(args):
    session = _load(args)
    if session is None:
        return 1

    server = session.registry.set_server_keys()
    _save(args, session)

    print("[+] Clés serveur générées.")
    print(f"    Publique : {server.public_key}")
    return 0


# ---------------------------------------------------
# Commande : add-peer
# ---------------------------------------------------

def cmd_add_peer(args):
    session = _load(args)
    if session is None:
        return 1

    peer = session.registry.add_peer()
    if args.name:
        session.registry.update_peer(peer.id, SetName(args.name))
    if args.keys:
        session.registry.generate_keys_for(peer.id)
    _save(args, session)

    print(f"[+] Peer ajouté : {peer.name} (id {peer.id}, {peer.allowed_ips})")
    if not peer.public_key:
        print(f"[!] Pas encore de clés : wg-builder gen-keys {peer.id}")
    return 0


# ---------------------------------------------------
# Commande : remove-peer
# ---------------------------------------------------

def cmd_remove_peer(args):
    session = _load(args)
    if session is None:
        return 1

    if _unknown_peer(session, args.id):
        return 0
    session.registry.remove_peer(args.id)
    _save(args, session)

    print(f"[OK] Peer supprimé : {args.id}")
    return 0


# ---------------------------------------------------
# Commande : gen-keys
# ---------------------------------------------------

def cmd_gen_keys(args):
    session = _load(args)
    if session is None:
        return 1

    if _unknown_peer(session, args.id):
        return 0
    session.registry.generate_keys_for(args.id)
    _save(args, session)

    peer = session.registry.get(args.id)
    print(f"[+] Clés générées pour {peer.name}.")
    print(f"    Publique : {peer.public_key}")
    return 0


# ---------------------------------------------------
# Commande : set
# ---------------------------------------------------

def cmd_set(args):
    session = _load(args)
    if session is None:
        return 1

    field = SET_FIELDS[args.field]
    value = args.value
    try:
        if field == "persistent_keepalive":
            value = int(value)
        if _unknown_peer(session, args.id):
            return 0
        session.registry.update_field(args.id, field, value)
    except ValueError as e:
        print(f"[ERREUR] Valeur invalide pour {args.field} : {e}")
        return 1

    _save(args, session)
    print(f"[OK] Peer {args.id} : {args.field} = {value}")
    return 0


# ---------------------------------------------------
# Commande : toggle
# ---------------------------------------------------

def cmd_toggle(args):
    session = _load(args)
    if session is None:
        return 1

    if _unknown_peer(session, args.id):
        return 0
    session.registry.toggle_enabled(args.id)
    _save(args, session)

    peer = session.registry.get(args.id)
    print(f"[OK] Peer {peer.name} {'activé' if peer.enabled else 'désactivé'}.")
    return 0


# ---------------------------------------------------
# Commande : set-interface
# ---------------------------------------------------

def cmd_set_interface(args):
    session = _load(args)
    if session is None:
        return 1

    session.update_interface(
        address=args.address,
        listen_port=args.port,
        interface=args.interface,
    )
    _save(args, session)

    s = session.settings
    print(f"[OK] Interface {s.interface} : {s.address}, port {s.listen_port}")
    return 0


# ---------------------------------------------------
# Commande : list-peers / show
# ---------------------------------------------------

def cmd_list(args):
    session = _load(args)
    if session is None:
        return 1

    print("=== Serveur ===")
    s = session.settings
    print(f"Interface : {s.interface}")
    print(f"Adresse   : {s.address}")
    print(f"Port      : {s.listen_port}")
    print(f"Clé pub.  : {session.server.public_key or '-'}\n")

    print("=== Peers ===")
    if not len(session.registry):
        print("Aucun peer.")
    else:
        for p in session.registry:
            status = "actif" if p.enabled else "désactivé"
            keys = "clés OK" if p.public_key else "sans clés"
            print(f"- [{p.id}] {p.name} ({p.allowed_ips}) {status}, {keys}")
    return 0


def cmd_show(args):
    session = _load(args)
    if session is None:
        return 1

    sys.stdout.write(session.config_text)
    return 0


# ---------------------------------------------------
# Commande : export / generate-qr / copy
# ---------------------------------------------------

def cmd_export(args):
    session = _load(args)
    if session is None:
        return 1

    try:
        path = export_config(session.config_text, args.output)
    except NothingToExportError:
        print("[!] Aucune configuration à exporter.")
        return 1

    print(f"[OK] Config exportée : {path}")
    return 0


def cmd_generate_qr(args):
    session = _load(args)
    if session is None:
        return 1

    try:
        path = export_qr(session.config_text, args.output)
    except NothingToExportError:
        print("[!] Aucune configuration à exporter.")
        return 1

    print(f"[OK] QR code généré : {path}")
    return 0


def cmd_copy(args):
    session = _load(args)
    if session is None:
        return 1

    if args.target.startswith("peer-"):
        if args.peer is None:
            print("[ERREUR] --peer est requis pour", args.target)
            return 1
        peer = session.registry.get(args.peer)
        if peer is None:
            _unknown_peer(session, args.peer)
            return 0
        text = peer.private_key if args.target == "peer-private" else peer.public_key
    elif args.target == "server-private":
        text = session.server.private_key
    elif args.target == "server-public":
        text = session.server.public_key
    else:
        text = session.config_text

    try:
        used = copy_to_clipboard(text)
    except NothingToCopyError:
        print("[!] Rien à copier.")
        return 1
    except ClipboardError as e:
        print(f"[ERREUR] Copie impossible : {e}")
        return 1

    if used == "primary":
        print(f"[OK] {args.target} copié dans le presse-papier.")
    else:
        print(f"[OK] Presse-papier indisponible, {args.target} affiché ci-dessus.")
    return 0


# ---------------------------------------------------
# Commande : serve
# ---------------------------------------------------

def cmd_serve(args):
    serve(_state_path(args), host=args.host, port=args.port)
    return 0


# ---------------------------------------------------
# CLI / Parser
# ---------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wg-builder")
    parser.add_argument("--state", help="fichier d'état (défaut : data/state.json)")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd")

    # init
    p_init = sub.add_parser("init")
    p_init.add_argument("--address", default=DEFAULT_ADDRESS)
    p_init.add_argument("--port", default=str(DEFAULT_PORT))
    p_init.add_argument("--interface", default=DEFAULT_INTERFACE)
    p_init.add_argument("--force", action="store_true")
    p_init.set_defaults(func=cmd_init)

    # server-keys
    p_skeys = sub.add_parser("server-keys")
    p_skeys.set_defaults(func=cmd_server_keys)

    # add-peer
    p_add = sub.add_parser("add-peer")
    p_add.add_argument("--name")
    p_add.add_argument("--keys", action="store_true", help="génère aussi les clés")
    p_add.set_defaults(func=cmd_add_peer)

    # remove-peer
    p_rm = sub.add_parser("remove-peer")
    p_rm.add_argument("id", type=int)
    p_rm.set_defaults(func=cmd_remove_peer)

    # gen-keys
    p_keys = sub.add_parser("gen-keys")
    p_keys.add_argument("id", type=int)
    p_keys.set_defaults(func=cmd_gen_keys)

    # set
    p_set = sub.add_parser("set")
    p_set.add_argument("id", type=int)
    p_set.add_argument("field", choices=list(SET_FIELDS))
    p_set.add_argument("value")
    p_set.set_defaults(func=cmd_set)

    # toggle
    p_toggle = sub.add_parser("toggle")
    p_toggle.add_argument("id", type=int)
    p_toggle.set_defaults(func=cmd_toggle)

    # set-interface
    p_iface = sub.add_parser("set-interface")
    p_iface.add_argument("--address")
    p_iface.add_argument("--port")
    p_iface.add_argument("--interface")
    p_iface.set_defaults(func=cmd_set_interface)

    # list-peers
    p_list = sub.add_parser("list-peers")
    p_list.set_defaults(func=cmd_list)

    # show
    p_show = sub.add_parser("show")
    p_show.set_defaults(func=cmd_show)

    # export
    p_export = sub.add_parser("export")
    p_export.add_argument("--output", default=".", help="dossier de destination")
    p_export.set_defaults(func=cmd_export)

    # generate-qr
    p_qr = sub.add_parser("generate-qr")
    p_qr.add_argument("--output", default="configs/wg0.png")
    p_qr.set_defaults(func=cmd_generate_qr)

    # copy
    p_copy = sub.add_parser("copy")
    p_copy.add_argument("target", choices=COPY_TARGETS)
    p_copy.add_argument("--peer", type=int)
    p_copy.set_defaults(func=cmd_copy)

    # serve
    p_serve = sub.add_parser("serve")
    p_serve.add_argument("--host")
    p_serve.add_argument("--port", type=int)
    p_serve.set_defaults(func=cmd_serve)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    level = "DEBUG" if args.verbose else get_log_level()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
