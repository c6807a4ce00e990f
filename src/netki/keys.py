"""Key pairs for signed API access and certificate requests."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

DEFAULT_RSA_KEY_SIZE = 2048


@dataclass(frozen=True)
class KeyPair:
    """A private key and the public key it is used with.

    The public half is carried explicitly so callers can pair a private key
    with the public key they expect the service to see.
    """

    private_key: Any
    public_key: Any

    @classmethod
    def from_private_key(cls, private_key: Any) -> "KeyPair":
        return cls(private_key=private_key, public_key=private_key.public_key())

    @classmethod
    def generate_rsa(cls, key_size: int = DEFAULT_RSA_KEY_SIZE) -> "KeyPair":
        return cls.from_private_key(rsa.generate_private_key(public_exponent=65537, key_size=key_size))

    @classmethod
    def generate_secp256k1(cls) -> "KeyPair":
        return cls.from_private_key(ec.generate_private_key(ec.SECP256K1()))

    @classmethod
    def from_pem(cls, data: bytes | str, password: bytes | None = None) -> "KeyPair":
        if isinstance(data, str):
            data = data.encode("ascii")
        return cls.from_private_key(serialization.load_pem_private_key(data, password=password))

    @property
    def is_rsa(self) -> bool:
        return isinstance(self.private_key, rsa.RSAPrivateKey)

    @property
    def is_secp256k1(self) -> bool:
        return (
            isinstance(self.private_key, ec.EllipticCurvePrivateKey)
            and isinstance(self.public_key, ec.EllipticCurvePublicKey)
            and isinstance(self.private_key.curve, ec.SECP256K1)
            and isinstance(self.public_key.curve, ec.SECP256K1)
        )

    def private_pem(self, password: bytes | None = None) -> bytes:
        encryption: serialization.KeySerializationEncryption
        if password:
            encryption = serialization.BestAvailableEncryption(password)
        else:
            encryption = serialization.NoEncryption()
        return self.private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=encryption,
        )

    def public_der(self) -> bytes:
        return self.public_key.public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )


def save_key_pair(key_pair: KeyPair, path: str | Path, password: bytes | None = None) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    os.chmod(target.parent, 0o700)
    target.write_bytes(key_pair.private_pem(password=password))
    os.chmod(target, 0o600)
    return target


def load_key_pair(path: str | Path, password: bytes | None = None) -> KeyPair:
    source = Path(path)
    if not source.exists():
        raise ValueError(f"Key file not found: {source}")
    try:
        return KeyPair.from_pem(source.read_bytes(), password=password)
    except (TypeError, ValueError) as error:
        raise ValueError(f"Failed to parse key file {source}: {error}") from error
