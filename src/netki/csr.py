"""PKCS#10 certificate signing requests for certificate orders."""

from __future__ import annotations

import logging
from typing import Any

from cryptography import x509
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.x509.oid import NameOID

from netki.errors import SignatureError, UnsupportedKeyError
from netki.keys import KeyPair
from netki.types import CustomerProfile

log = logging.getLogger(__name__)


def build_subject(profile: CustomerProfile) -> x509.Name:
    """X.500 subject, one attribute per RDN, in the order issued requests use.

    Order: C, O, L, CN, street, postalCode. Absent fields are left out.
    """
    attributes = [
        (NameOID.COUNTRY_NAME, profile.country),
        (NameOID.ORGANIZATION_NAME, profile.organization_name),
        (NameOID.LOCALITY_NAME, profile.city),
        (NameOID.COMMON_NAME, profile.common_name),
        (NameOID.STREET_ADDRESS, profile.street_address),
        (NameOID.POSTAL_CODE, profile.postal_code),
    ]
    return x509.Name([x509.NameAttribute(oid, value) for oid, value in attributes if value])


def _key_usage() -> x509.KeyUsage:
    return x509.KeyUsage(
        digital_signature=True,
        content_commitment=True,
        key_encipherment=True,
        data_encipherment=False,
        key_agreement=False,
        key_cert_sign=False,
        crl_sign=False,
        encipher_only=False,
        decipher_only=False,
    )


def verify_csr_signature(csr: x509.CertificateSigningRequest, public_key: Any) -> bool:
    if not isinstance(public_key, rsa.RSAPublicKey):
        return False
    hash_algorithm = csr.signature_hash_algorithm
    if hash_algorithm is None:
        return False
    try:
        public_key.verify(csr.signature, csr.tbs_certrequest_bytes, padding.PKCS1v15(), hash_algorithm)
    except InvalidSignature:
        return False
    return True


def build_csr(key_pair: KeyPair, profile: CustomerProfile) -> x509.CertificateSigningRequest:
    if not key_pair.is_rsa:
        raise UnsupportedKeyError("RSA KeyPair Required")

    csr = (
        x509.CertificateSigningRequestBuilder()
        .subject_name(build_subject(profile))
        .add_extension(x509.BasicConstraints(ca=False, path_length=None), critical=False)
        .add_extension(_key_usage(), critical=False)
        .sign(key_pair.private_key, hashes.SHA256())
    )

    # Self-check only: catches a private key paired with the wrong public key.
    if not verify_csr_signature(csr, key_pair.public_key):
        raise SignatureError("CSR Signature Failure")
    return csr


def generate_csr(key_pair: KeyPair, profile: CustomerProfile) -> str:
    csr = build_csr(key_pair, profile)
    log.debug("Generated CSR with %d-bit RSA key", key_pair.private_key.key_size)
    return csr.public_bytes(serialization.Encoding.PEM).decode("ascii")
