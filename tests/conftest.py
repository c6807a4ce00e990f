from __future__ import annotations

import json
from typing import Any

import pytest

from netki.keys import KeyPair
from netki.types import CustomerProfile, HttpResponse, IdentityDocument


class RecordingFetcher:
    """Returns queued responses and records every request it is given."""

    def __init__(self, *responses: HttpResponse):
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def queue(self, payload: Any, status: int = 200) -> None:
        body = payload if isinstance(payload, str) else json.dumps(payload)
        self.responses.append(HttpResponse(status=status, body=body))

    def __call__(self, url: str, method: str, headers: dict[str, str], body: bytes | None) -> HttpResponse:
        self.calls.append({"url": url, "method": method, "headers": headers, "body": body})
        return self.responses.pop(0)

    def json_body(self, index: int = -1) -> Any:
        body = self.calls[index]["body"]
        assert body is not None
        return json.loads(body.decode("utf-8"))


@pytest.fixture
def fetcher() -> RecordingFetcher:
    return RecordingFetcher()


@pytest.fixture(scope="session")
def ec_key() -> KeyPair:
    return KeyPair.generate_secp256k1()


@pytest.fixture(scope="session")
def rsa_key() -> KeyPair:
    return KeyPair.generate_rsa()


@pytest.fixture
def customer_profile() -> CustomerProfile:
    return CustomerProfile(
        first_name="Testy",
        last_name="Testerson",
        street_address="123 Main St.",
        city="Los Angeles",
        postal_code="11111",
        country="US",
        organization_name="Netki, Inc.",
        email="user@domain.com",
        ssn="1234567890",
        phone="+18182234567",
        dob="1980-04-02",
        identity_documents=(
            IdentityDocument(
                identity="12345678",
                type="drivers licence",
                state="CA",
                expiration="2030-01-02",
            ),
            IdentityDocument(
                identity="P12345678",
                type="passport",
                state="CA",
                dl_rta_number="12345",
                expiration="2031-07-12",
            ),
        ),
    )
