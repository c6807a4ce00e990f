"""Request authentication headers for the Netki partner API.

Signed modes sign ``url + body`` with ECDSA-SHA256 and send the signer's
DER public key alongside the signature, both hex encoded.
"""

from __future__ import annotations

import binascii

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import load_der_public_key

from netki.credentials import CredentialContext, Delegated, SelfSigned, SharedSecret
from netki.errors import CredentialError
from netki.keys import KeyPair
from netki.types import VerifySignatureResult

Headers = list[tuple[str, str]]


def _normalize_body(body: bytes | str | None) -> bytes:
    if body is None:
        return b""
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    raise ValueError("Unsupported body type. Use bytes, str, or None.")


def _hex(value: bytes) -> str:
    return binascii.hexlify(value).decode("ascii").upper()


def signing_material(url: str, body: bytes | str | None = None) -> bytes:
    return url.encode("utf-8") + _normalize_body(body)


def sign_request(user_key: KeyPair, url: str, body: bytes | str | None = None) -> bytes:
    return user_key.private_key.sign(signing_material(url, body), ec.ECDSA(hashes.SHA256()))


def _signed_headers(user_key: KeyPair, url: str, body: bytes | str | None) -> Headers:
    signature = sign_request(user_key, url, body)
    return [
        ("X-Identity", _hex(user_key.public_der())),
        ("X-Signature", _hex(signature)),
    ]


def request_headers(
    context: CredentialContext,
    method: str,
    url: str,
    body: bytes | str | None = None,
) -> Headers:
    """Authentication headers for one request.

    ``method`` is accepted so every mode sees the full request; none of the
    current modes sign it.
    """
    if isinstance(context, SharedSecret):
        return [
            ("Authorization", context.api_key),
            ("X-Partner-ID", context.partner_id),
        ]
    if isinstance(context, Delegated):
        return [
            ("X-Partner-Key", context.partner_ksk_hex),
            ("X-Partner-KeySig", context.partner_ksk_signature_hex),
            *_signed_headers(context.user_key, url, body),
        ]
    if isinstance(context, SelfSigned):
        return _signed_headers(context.user_key, url, body)
    raise CredentialError(f"Invalid access type: {type(context).__name__}")


def verify_request_signature(
    *,
    url: str,
    identity_hex: str,
    signature_hex: str,
    body: bytes | str | None = None,
) -> VerifySignatureResult:
    try:
        public_key = load_der_public_key(binascii.unhexlify(identity_hex))
        signature = binascii.unhexlify(signature_hex)
    except (binascii.Error, ValueError, UnsupportedAlgorithm) as error:
        return VerifySignatureResult(valid=False, reason=f"Invalid identity or signature encoding: {error}")

    if not isinstance(public_key, ec.EllipticCurvePublicKey) or not isinstance(public_key.curve, ec.SECP256K1):
        return VerifySignatureResult(valid=False, reason="Identity key must be ECDSA on secp256k1")

    try:
        public_key.verify(signature, signing_material(url, body), ec.ECDSA(hashes.SHA256()))
    except InvalidSignature:
        return VerifySignatureResult(valid=False, reason="Signature does not match request")

    return VerifySignatureResult(valid=True)
