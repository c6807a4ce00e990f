"""Netki partner SDK: signed API access and certificate ordering."""

from netki.certificate import CertificateOrder, OrderPhase, customer_data_fields
from netki.client import DEFAULT_API_URL, NetkiClient
from netki.credentials import CredentialContext, Delegated, SelfSigned, SharedSecret
from netki.csr import generate_csr, verify_csr_signature
from netki.errors import (
    APIError,
    CredentialError,
    MissingOrderIdError,
    MissingTokenError,
    NetkiError,
    PreconditionError,
    ResponseFormatError,
    SignatureError,
    TransportError,
    UnsupportedKeyError,
    UnsupportedMethodError,
)
from netki.http_signatures import request_headers, sign_request, signing_material, verify_request_signature
from netki.keys import KeyPair, load_key_pair, save_key_pair
from netki.transport import Transport
from netki.types import (
    CertificateBundle,
    CustomerProfile,
    HttpResponse,
    IdentityDocument,
    Product,
    VerifySignatureResult,
)

__all__ = [
    "APIError",
    "CertificateBundle",
    "CertificateOrder",
    "CredentialContext",
    "CredentialError",
    "CustomerProfile",
    "DEFAULT_API_URL",
    "Delegated",
    "HttpResponse",
    "IdentityDocument",
    "KeyPair",
    "MissingOrderIdError",
    "MissingTokenError",
    "NetkiClient",
    "NetkiError",
    "OrderPhase",
    "PreconditionError",
    "Product",
    "ResponseFormatError",
    "SelfSigned",
    "SharedSecret",
    "SignatureError",
    "Transport",
    "TransportError",
    "UnsupportedKeyError",
    "UnsupportedMethodError",
    "VerifySignatureResult",
    "customer_data_fields",
    "generate_csr",
    "load_key_pair",
    "request_headers",
    "save_key_pair",
    "sign_request",
    "signing_material",
    "verify_csr_signature",
    "verify_request_signature",
]

__version__ = "0.0.1"
