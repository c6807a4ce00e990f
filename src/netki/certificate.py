"""Certificate order workflow.

An order moves forward through data submission, order creation, CSR
submission, status queries and revocation. Each step is one API call. A step
that fails raises and leaves the order exactly as it was.

CSR submission is not safe to repeat: the CA may reject a second CSR for the
same order, so callers decide whether to resubmit after an error.
"""

from __future__ import annotations

import enum
import logging
from datetime import date, datetime
from typing import Any

from netki.csr import generate_csr
from netki.errors import MissingOrderIdError, MissingTokenError, PreconditionError
from netki.keys import KeyPair
from netki.transport import Transport
from netki.types import CertificateBundle, CustomerProfile, DateInput, IdentityDocument, JsonDict

log = logging.getLogger(__name__)

ORDER_FINALIZED = "Order Finalized"
UNKNOWN_STATUS = "UNKNOWN"
DATE_FORMAT = "%Y-%m-%d"

CERTIFICATE_PATH = "/v1/certificate"
TOKEN_PATH = "/v1/certificate/token"

# (attribute, wire name); organization_name only goes into the CSR subject
_CUSTOMER_FIELDS = (
    ("first_name", "first_name"),
    ("last_name", "last_name"),
    ("middle_name", "middle_name"),
    ("street_address", "street_address"),
    ("city", "city"),
    ("state", "state"),
    ("postal_code", "postal_code"),
    ("country", "country"),
    ("phone", "phone"),
    ("email", "email"),
    ("ssn", "ssn"),
    ("dob", "dob"),
)

_IDENTITY_FIELDS = (
    ("identity", "identity_"),
    ("type", "identity_type"),
    ("state", "identity_state"),
    ("gender", "identity_gender"),
    ("dl_rta_number", "identity_dl_rta_number"),
    ("expiration", "identity_expiration"),
)


class OrderPhase(enum.IntEnum):
    NEW = 0
    DATA_SUBMITTED = 1
    ORDERED = 2
    CSR_SUBMITTED = 3
    QUERIED = 4
    REVOKED = 5


def _wire_value(value: DateInput) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime(DATE_FORMAT)
    return str(value)


def _identity_fields(document: IdentityDocument, index: int) -> JsonDict:
    suffix = str(index) if index > 1 else ""
    out = JsonDict()
    for attribute, wire_name in _IDENTITY_FIELDS:
        value = getattr(document, attribute)
        if value is None:
            continue
        out[f"{wire_name}{suffix}"] = _wire_value(value)
    return out


def customer_data_fields(profile: CustomerProfile) -> JsonDict:
    """Flatten a profile into the key/value map the token endpoint expects.

    The second and later identity documents get their position appended to
    every key (``identity_type2``, ``identity_2``, ...).
    """
    out = JsonDict()
    for attribute, wire_name in _CUSTOMER_FIELDS:
        value = getattr(profile, attribute)
        if value is None:
            continue
        out[wire_name] = _wire_value(value)

    for index, document in enumerate(profile.identity_documents, start=1):
        out.update(_identity_fields(document, index))
    return out


class CertificateOrder:
    """One certificate transaction. Not safe to share between threads."""

    def __init__(
        self,
        transport: Transport,
        *,
        product_id: str | None = None,
        customer_profile: CustomerProfile | None = None,
    ):
        self._transport = transport
        self.product_id = product_id
        self.customer_profile = customer_profile

        self.id: str | None = None
        self.data_token: str | None = None
        self.order_status = UNKNOWN_STATUS
        self.order_error: str | None = None

        self.root_pem: str | None = None
        self.cert_pem: str | None = None
        self.intermediate_pems: list[str] = []

        self.phase = OrderPhase.NEW

    def __repr__(self) -> str:
        return f"CertificateOrder(id={self.id!r}, phase={self.phase.name}, order_status={self.order_status!r})"

    def _advance(self, phase: OrderPhase) -> None:
        if phase > self.phase:
            self.phase = phase

    def _require_order_id(self) -> str:
        if self.id is None:
            raise PreconditionError("missing order id")
        return self.id

    def _require_profile(self) -> CustomerProfile:
        if self.customer_profile is None:
            raise PreconditionError("missing customer data")
        return self.customer_profile

    @property
    def bundle(self) -> CertificateBundle:
        return CertificateBundle(
            root_pem=self.root_pem,
            cert_pem=self.cert_pem,
            intermediate_pems=tuple(self.intermediate_pems),
        )

    def submit_user_data(self) -> str:
        profile = self._require_profile()

        payload = customer_data_fields(profile)
        payload["product"] = self.product_id
        response = self._transport.send_json("POST", TOKEN_PATH, payload)

        token = response.get("token")
        if token is None:
            raise MissingTokenError("Data Token Missing from API Response")

        self.data_token = str(token)
        self._advance(OrderPhase.DATA_SUBMITTED)
        log.info("Customer data accepted for product %s", self.product_id)
        return self.data_token

    def submit_order(self, stripe_token: str | None = None, *, email: str | None = None) -> str:
        if self.data_token is None:
            raise PreconditionError("missing data token")

        payload: dict[str, Any] = {
            "certdata_token": self.data_token,
            "product": self.product_id,
        }
        order_email = email or (self.customer_profile.email if self.customer_profile else None)
        if order_email is not None:
            payload["email"] = order_email
        if stripe_token is not None:
            payload["stripe_token"] = stripe_token

        response = self._transport.send_json("POST", CERTIFICATE_PATH, payload)

        order_id = response.get("order_id")
        if order_id is None:
            raise MissingOrderIdError("Order ID Missing from API Response")

        self.id = str(order_id)
        self._advance(OrderPhase.ORDERED)
        log.info("Certificate order %s created", self.id)
        return self.id

    def submit_csr(self, key_pair: KeyPair) -> None:
        order_id = self._require_order_id()
        profile = self._require_profile()

        signed_csr = generate_csr(key_pair, profile)
        self._transport.send_json("POST", f"{CERTIFICATE_PATH}/{order_id}/csr", {"signed_csr": signed_csr})

        self._advance(OrderPhase.CSR_SUBMITTED)
        log.info("CSR submitted for order %s", order_id)

    def get_status(self) -> str:
        order_id = self._require_order_id()
        response = self._transport.send_json("GET", f"{CERTIFICATE_PATH}/{order_id}")

        if "order_status" in response:
            self.order_status = str(response["order_status"])
        if response.get("order_error") is not None:
            self.order_error = str(response["order_error"])

        bundle = response.get("certificate_bundle")
        if isinstance(bundle, dict):
            self.root_pem = bundle.get("root")
            self.cert_pem = bundle.get("certificate")
            self.intermediate_pems.extend(str(pem) for pem in bundle.get("intermediate") or [])

        self._advance(OrderPhase.QUERIED)
        log.info("Order %s status: %s", order_id, self.order_status)
        return self.order_status

    def revoke(self, reason: str) -> None:
        order_id = self._require_order_id()
        self._transport.send_json("DELETE", f"{CERTIFICATE_PATH}/{order_id}", {"revocation_reason": reason})
        self._advance(OrderPhase.REVOKED)
        log.info("Order %s revoked", order_id)

    def is_order_complete(self) -> bool:
        return self.order_status == ORDER_FINALIZED
