"""Netki partner client: credentials, API base URL, and certificate helpers."""

from __future__ import annotations

import os
from typing import Any

from netki.certificate import CertificateOrder
from netki.credentials import CredentialContext, Delegated, SelfSigned, SharedSecret
from netki.errors import ResponseFormatError
from netki.keys import KeyPair
from netki.transport import Fetcher, Transport
from netki.types import CustomerProfile, Product

DEFAULT_API_URL = "https://api.netki.com"
API_URL_ENV = "NETKI_API_URL"


def _resolve_api_url(explicit: str | None) -> str:
    return explicit or os.environ.get(API_URL_ENV) or DEFAULT_API_URL


def _product_from_dict(raw: Any) -> Product:
    if not isinstance(raw, dict) or raw.get("id") is None:
        raise ResponseFormatError("Product Response Missing ID Field")

    prices = raw.get("current_price")
    current_price = {str(country): int(price) for country, price in prices.items()} if isinstance(prices, dict) else {}

    return Product(
        id=str(raw["id"]),
        name=str(raw["product_name"]) if raw.get("product_name") is not None else None,
        current_tier_name=str(raw["current_tier"]) if raw.get("current_tier") is not None else None,
        current_price=current_price,
        term=int(raw.get("term") or 0),
    )


class NetkiClient:
    def __init__(
        self,
        credentials: CredentialContext,
        *,
        api_url: str | None = None,
        fetcher: Fetcher | None = None,
        timeout: float | None = None,
    ):
        self.credentials = credentials
        self.api_url = _resolve_api_url(api_url)
        self.transport = Transport(credentials, self.api_url, fetcher=fetcher, timeout=timeout)

    @classmethod
    def with_api_key(cls, partner_id: str, api_key: str, **kwargs: Any) -> "NetkiClient":
        return cls(SharedSecret(api_key=api_key, partner_id=partner_id), **kwargs)

    @classmethod
    def with_delegated_key(
        cls,
        partner_ksk_hex: str,
        partner_ksk_signature_hex: str,
        user_key: KeyPair,
        **kwargs: Any,
    ) -> "NetkiClient":
        credentials = Delegated(
            partner_ksk_hex=partner_ksk_hex,
            partner_ksk_signature_hex=partner_ksk_signature_hex,
            user_key=user_key,
        )
        return cls(credentials, **kwargs)

    @classmethod
    def with_signed_requests(cls, partner_id: str, user_key: KeyPair, **kwargs: Any) -> "NetkiClient":
        return cls(SelfSigned(partner_id=partner_id, user_key=user_key), **kwargs)

    def create_certificate(
        self,
        product_id: str | None = None,
        customer_profile: CustomerProfile | None = None,
    ) -> CertificateOrder:
        return CertificateOrder(self.transport, product_id=product_id, customer_profile=customer_profile)

    def get_certificate(self, order_id: str) -> CertificateOrder:
        order = self.create_certificate()
        order.id = order_id
        order.get_status()
        return order

    def get_available_products(self) -> list[Product]:
        response = self.transport.send_json("GET", "/v1/certificate/products")
        return [_product_from_dict(raw) for raw in response.get("products") or []]

    def get_ca_cert_bundle(self) -> str:
        response = self.transport.send_json("GET", "/v1/certificate/cacert")
        return str(response.get("cacerts") or "")

    def get_account_balance(self) -> int:
        response = self.transport.send_json("GET", "/v1/certificate/balance")
        return int(response.get("available_balance") or 0)
