# src/wg_builder/keys.py
"""
Génération de clés SIMULÉE.

Les jetons produits ici ont l'allure d'une clé WireGuard (44 caractères
base64 terminés par '=') mais ne sont PAS des clés Curve25519 valides,
et la clé "publique" n'est pas dérivée de la clé privée.
Pour de vraies clés, utiliser `wg genkey` / `wg pubkey`.
"""
from __future__ import annotations
import secrets
import string

KEY_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "+/"
TOKEN_BODY_LENGTH = 43


def generate_token() -> str:
    body = "".join(secrets.choice(KEY_ALPHABET) for _ in range(TOKEN_BODY_LENGTH))
    return body + "="


def derive_public(private_token: str) -> str:
    # Pas une dérivation : nouveau jeton indépendant de l'entrée.
    return generate_token()


def generate_keypair() -> tuple[str, str]:
    priv = generate_token()
    pub = derive_public(priv)
    return priv, pub
