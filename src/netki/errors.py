"""Exceptions raised by the Netki partner SDK."""

from __future__ import annotations


class NetkiError(Exception):
    """Base class for every error the SDK raises."""


class CredentialError(NetkiError):
    """Credential material is missing or uses the wrong key algorithm/curve."""


class UnsupportedMethodError(NetkiError):
    """HTTP method outside GET/POST/PUT/DELETE."""


class TransportError(NetkiError):
    """The request never produced an HTTP response (connection, DNS, TLS, ...)."""


class APIError(NetkiError):
    """The API answered with HTTP >= 300 or ``success`` not true."""

    def __init__(self, message: str, failures: list[str] | None = None, status: int | None = None):
        self.message = message
        self.failures = list(failures or [])
        self.status = status
        super().__init__(format_api_error(message, self.failures))


class ResponseFormatError(NetkiError):
    """A successful response is missing data the SDK needs."""


class MissingTokenError(ResponseFormatError):
    pass


class MissingOrderIdError(ResponseFormatError):
    pass


class PreconditionError(NetkiError):
    """A certificate order step was called out of order."""


class SignatureError(NetkiError):
    """A freshly built CSR did not verify against the supplied public key."""


class UnsupportedKeyError(NetkiError):
    pass


def format_api_error(message: str, failures: list[str]) -> str:
    if not failures:
        return message
    return f"{message} [FAILURES: {','.join(failures)}]"
