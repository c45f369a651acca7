# src/wg_builder/server.py
"""
Petit serveur HTTP en lecture seule.

    GET /          -> config rendue (text/plain)
    GET /wg0.conf  -> même texte, en pièce jointe
    GET /server    -> "OK" (health-check)
    autre          -> 404
"""
from __future__ import annotations
import logging
from functools import partial
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

from .config import EXPORT_FILENAME, EXPORT_MIME_TYPE, get_http_host, get_http_port, get_state_path
from .state import load_session

log = logging.getLogger(__name__)

TEXT_CONTENT_TYPE = f"{EXPORT_MIME_TYPE}; charset=utf-8"


class ConfigHandler(BaseHTTPRequestHandler):

    def __init__(self, *args, state_path: Path, **kwargs):
        self.state_path = state_path
        super().__init__(*args, **kwargs)

    def log_message(self, format, *args):
        log.debug("%s - %s", self.address_string(), format % args)

    def _respond_raw(self, code: int, raw: bytes, content_type: str, headers: Optional[dict] = None):
        self.send_response(code)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(raw)))
        self.send_header("Cache-Control", "no-store")
        for name, value in (headers or {}).items():
            self.send_header(name, value)
        self.end_headers()
        try:
            self.wfile.write(raw)
        except (BrokenPipeError, ConnectionResetError):
            return

    def _not_found(self):
        self._respond_raw(404, b"", TEXT_CONTENT_TYPE)

    def _config_text(self) -> str:
        # état relu à chaque requête : aucun état partagé entre requêtes
        return load_session(self.state_path).config_text

    def do_GET(self):
        path = urlsplit(self.path).path or "/"
        log.info("GET %s", path)

        if path == "/server":
            self._respond_raw(200, b"OK", TEXT_CONTENT_TYPE)
            return

        if path not in ("/", f"/{EXPORT_FILENAME}"):
            self._not_found()
            return

        try:
            text = self._config_text()
        except FileNotFoundError as e:
            log.warning("%s", e)
            self._not_found()
            return
        except (ValueError, KeyError, TypeError) as e:
            # fichier d'état illisible (JSONDecodeError est un ValueError)
            log.error("invalid state file %s: %s", self.state_path, e)
            self._respond_raw(500, b"Invalid state file", TEXT_CONTENT_TYPE)
            return

        if path == "/":
            self._respond_raw(200, text.encode("utf-8"), TEXT_CONTENT_TYPE)
            return

        if not text.strip():
            self._not_found()
            return
        self._respond_raw(
            200,
            text.encode("utf-8"),
            TEXT_CONTENT_TYPE,
            {"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
        )


def make_server(
    state_path: Optional[Path] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
) -> HTTPServer:
    state_path = state_path or get_state_path()
    host = get_http_host() if host is None else host
    port = get_http_port() if port is None else port
    handler = partial(ConfigHandler, state_path=state_path)
    return HTTPServer((host, port), handler)


def serve(
    state_path: Optional[Path] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
) -> None:
    httpd = make_server(state_path, host, port)
    print(f"Server started at :{httpd.server_address[1]}")
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        httpd.server_close()
