# src/wg_builder/export.py
from __future__ import annotations
import logging
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Callable, List, Optional, Union

import qrcode

from .config import EXPORT_FILENAME

log = logging.getLogger(__name__)

CopyMechanism = Callable[[str], None]

# outils presse-papier essayés dans l'ordre
CLIPBOARD_COMMANDS: List[List[str]] = [
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["pbcopy"],
]


class NothingToExportError(ValueError):
    pass


class NothingToCopyError(ValueError):
    pass


class ClipboardError(RuntimeError):
    pass


def _ensure_content(text: str) -> None:
    if not text or not text.strip():
        raise NothingToExportError("No configuration to export")


# ---------- Fichier ----------

def export_config(text: str, directory: Union[str, Path] = ".") -> Path:
    """
    Écrit <directory>/wg0.conf avec le texte tel quel.

    Lève NothingToExportError si le texte est vide ou blanc : aucun
    fichier n'est créé dans ce cas.
    """
    _ensure_content(text)

    path = Path(directory) / EXPORT_FILENAME
    path.parent.mkdir(parents=True, exist_ok=True)
    # newline="" : pas de conversion des fins de ligne
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(text)
    log.info("configuration exported to %s", path)
    return path


def export_qr(text: str, path: Union[str, Path]) -> Path:
    _ensure_content(text)

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    img = qrcode.make(text)
    img.save(str(path))
    log.info("QR code written to %s", path)
    return path


# ---------- Presse-papier ----------

def system_clipboard(text: str) -> None:
    """Copie via le premier outil système disponible."""
    for cmd in CLIPBOARD_COMMANDS:
        if shutil.which(cmd[0]) is None:
            continue
        subprocess.run(cmd, input=text, text=True, check=True, timeout=5)
        return
    raise ClipboardError("No clipboard tool found (wl-copy, xclip, xsel, pbcopy)")


def stdout_fallback(text: str) -> None:
    sys.stdout.write(text)
    if not text.endswith("\n"):
        sys.stdout.write("\n")
    sys.stdout.flush()


def copy_to_clipboard(
    text: str,
    primary: Optional[CopyMechanism] = None,
    fallback: Optional[CopyMechanism] = None,
) -> str:
    """
    Copie `text` avec `primary`, sinon avec `fallback`.

    Retourne le nom du mécanisme utilisé ("primary" ou "fallback").
    Lève ClipboardError si les deux échouent.
    """
    if not text:
        raise NothingToCopyError("Nothing to copy")

    primary = primary or system_clipboard
    fallback = fallback or stdout_fallback

    try:
        primary(text)
        return "primary"
    except (ClipboardError, OSError, subprocess.SubprocessError) as e:
        log.info("primary clipboard unavailable (%s), using fallback", e)

    try:
        fallback(text)
    except (ClipboardError, OSError) as e:
        raise ClipboardError(f"Copy failed: {e}") from e
    return "fallback"
