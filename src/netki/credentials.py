"""How a client authenticates to the Netki API.

A credential context is one of three frozen variants. Each variant checks its
material when it is built, so a bad key never reaches request signing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from netki.errors import CredentialError
from netki.keys import KeyPair


def _require(value: str, name: str) -> None:
    if not isinstance(value, str) or not value:
        raise CredentialError(f"{name} is required")


def _require_secp256k1(user_key: KeyPair) -> None:
    if not isinstance(user_key, KeyPair):
        raise CredentialError("user_key must be a KeyPair")
    if not user_key.is_secp256k1:
        raise CredentialError("user_key must be an ECDSA key on secp256k1")


@dataclass(frozen=True)
class SharedSecret:
    api_key: str
    partner_id: str

    def __post_init__(self) -> None:
        _require(self.api_key, "api_key")
        _require(self.partner_id, "partner_id")

    def __repr__(self) -> str:
        return f"SharedSecret(partner_id={self.partner_id!r}, api_key=***)"


@dataclass(frozen=True)
class Delegated:
    partner_ksk_hex: str
    partner_ksk_signature_hex: str
    user_key: KeyPair

    def __post_init__(self) -> None:
        _require(self.partner_ksk_hex, "partner_ksk_hex")
        _require(self.partner_ksk_signature_hex, "partner_ksk_signature_hex")
        _require_secp256k1(self.user_key)


@dataclass(frozen=True)
class SelfSigned:
    partner_id: str
    user_key: KeyPair

    def __post_init__(self) -> None:
        _require(self.partner_id, "partner_id")
        _require_secp256k1(self.user_key)


CredentialContext = Union[SharedSecret, Delegated, SelfSigned]
