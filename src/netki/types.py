"""Shared SDK datatypes for the Netki partner SDK."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Union

DateInput = Union[date, str]


@dataclass(frozen=True)
class IdentityDocument:
    identity: str | None = None
    type: str | None = None
    state: str | None = None
    gender: str | None = None
    dl_rta_number: str | None = None
    expiration: DateInput | None = None


@dataclass(frozen=True)
class CustomerProfile:
    first_name: str | None = None
    last_name: str | None = None
    middle_name: str | None = None
    street_address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    phone: str | None = None
    email: str | None = None
    organization_name: str | None = None
    ssn: str | None = None
    dob: DateInput | None = None
    identity_documents: tuple[IdentityDocument, ...] = ()

    def __post_init__(self) -> None:
        # accept any iterable of documents but store an immutable tuple
        object.__setattr__(self, "identity_documents", tuple(self.identity_documents))

    @property
    def common_name(self) -> str:
        if self.first_name is None and self.last_name is None:
            return ""
        return f"{self.first_name or ''} {self.last_name or ''}"


@dataclass(frozen=True)
class Product:
    id: str
    name: str | None = None
    current_tier_name: str | None = None
    current_price: dict[str, int] = field(default_factory=dict)
    term: int = 0

    @property
    def countries(self) -> list[str]:
        return list(self.current_price.keys())

    def price_for(self, country: str) -> int | None:
        return self.current_price.get(country)


@dataclass(frozen=True)
class CertificateBundle:
    root_pem: str | None
    cert_pem: str | None
    intermediate_pems: tuple[str, ...] = ()


@dataclass(frozen=True)
class HttpResponse:
    status: int
    body: str


@dataclass(frozen=True)
class VerifySignatureResult:
    valid: bool
    reason: str | None = None


class JsonDict(dict[str, Any]):
    """Typed alias for JSON dictionaries used in internal serialization."""
