"""Data models for pagseguro-client.

All models use Pydantic v2. Transport and domain models are frozen: they are
built once, validated at construction, and never mutated afterwards.
Response models ignore unknown fields so new service fields do not break
decoding.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# =============================================================================
# Transport Models
# =============================================================================


class HttpMethod(str, Enum):
    """HTTP methods used by the service endpoints."""

    GET = "GET"
    POST = "POST"


class RequestBody(BaseModel):
    """Encoded request payload paired with the charset it must be sent in."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    content: str = Field(description="Encoded payload, e.g. a=1&b=2")
    charset: str = Field(description="Charset used to write the payload")
    content_type: str = Field(
        default="application/x-www-form-urlencoded", description="Media type without charset"
    )

    @property
    def content_type_with_charset(self) -> str:
        return f"{self.content_type}; charset={self.charset}"


class HttpResponse(BaseModel):
    """Normalized response: raw status code and the decoded body text.

    Status codes are not interpreted here; a 4xx/5xx body is as valid as a
    2xx one.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    status_code: int = Field(description="HTTP status code")
    body: str = Field(default="", description="Body decoded with the response charset")


# =============================================================================
# Domain Models (request side)
# =============================================================================


class _Domain(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class TransactionIdentify(_Domain):
    """Identifies an existing transaction by its service code."""

    code: str = Field(min_length=1, description="Transaction code")


class DocumentType(str, Enum):
    CPF = "CPF"
    CNPJ = "CNPJ"


class Document(_Domain):
    type: DocumentType = DocumentType.CPF
    value: str = Field(pattern=r"^\d+$", description="Digits only")


class Phone(_Domain):
    area_code: str = Field(pattern=r"^\d{2}$")
    number: str = Field(pattern=r"^\d{7,9}$")


class Address(_Domain):
    street: str
    number: str
    complement: str | None = None
    district: str
    city: str
    state: str = Field(pattern=r"^[A-Z]{2}$", description="Two-letter state code")
    country: str = "BRA"
    postal_code: str = Field(pattern=r"^\d{8}$", description="CEP, digits only")


class Sender(_Domain):
    """The buyer paying for the transaction."""

    name: str
    email: str
    phone: Phone | None = None
    document: Document | None = None
    hash: str | None = Field(default=None, description="Fingerprint from the checkout JS")


class PaymentItem(_Domain):
    id: str
    description: str
    amount: Decimal = Field(gt=0)
    quantity: int = Field(ge=1)


class ShippingType(IntEnum):
    PAC = 1
    SEDEX = 2
    NOT_SPECIFIED = 3


class Shipping(_Domain):
    type: ShippingType | None = None
    cost: Decimal | None = Field(default=None, ge=0)
    address: Address | None = None
    address_required: bool | None = None


class DirectPaymentRegistration(_Domain):
    """Everything a direct payment needs except the payment method itself."""

    sender: Sender
    items: tuple[PaymentItem, ...] = Field(min_length=1)
    currency: str = "BRL"
    reference: str | None = None
    notification_url: str | None = None
    receiver_email: str | None = None
    extra_amount: Decimal | None = None
    shipping: Shipping | None = None


class Holder(_Domain):
    """Credit card holder."""

    name: str
    document: Document
    birth_date: date
    phone: Phone | None = None


class CreditCard(_Domain):
    token: str = Field(min_length=1, description="Card token from the checkout JS")
    installment_quantity: int = Field(ge=1)
    installment_value: Decimal = Field(gt=0)
    no_interest_installment_quantity: int | None = Field(default=None, ge=2)
    holder: Holder
    billing_address: Address | None = None


class BankName(str, Enum):
    BANCO_DO_BRASIL = "bancodobrasil"
    BANRISUL = "banrisul"
    BRADESCO = "bradesco"
    HSBC = "hsbc"
    ITAU = "itau"


class Bank(_Domain):
    name: BankName


class TransactionMethod(str, Enum):
    """Wire values of the paymentMethod parameter."""

    BANK_SLIP = "boleto"
    CREDIT_CARD = "creditCard"
    ONLINE_DEBIT = "eft"


class InstallmentRequest(_Domain):
    amount: Decimal = Field(gt=0)
    card_brand: str | None = None
    max_installment_no_interest: int | None = Field(default=None, ge=1)


# =============================================================================
# Response Models
# =============================================================================


class _Result(BaseModel):
    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)


class ServiceError(_Result):
    """One <error> entry of a fault document."""

    code: str
    message: str


class OperationResult(_Result):
    """Plain <result>OK</result> answer of cancel and refund."""

    result: str

    @property
    def ok(self) -> bool:
        return self.result.upper() == "OK"


class PaymentMethod(_Result):
    type: int
    code: int | None = None


class TransactionItem(_Result):
    id: str
    description: str | None = None
    quantity: int
    amount: Decimal


class TransactionDetail(_Result):
    """Transaction as returned by the registration endpoints."""

    code: str
    date: datetime
    reference: str | None = None
    type: int
    status: int
    last_event_date: datetime | None = None
    payment_method: PaymentMethod | None = None
    payment_link: str | None = None
    gross_amount: Decimal
    discount_amount: Decimal | None = None
    fee_amount: Decimal | None = None
    net_amount: Decimal | None = None
    extra_amount: Decimal | None = None
    installment_count: int | None = None
    item_count: int | None = None
    items: list[TransactionItem] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def unwrap_items(cls, v: Any) -> Any:
        # <items><item/>...</items> arrives as {"item": [...]}
        if v is None:
            return []
        if isinstance(v, dict):
            return v.get("item") or []
        return v


class InstallmentDetail(_Result):
    card_brand: str
    quantity: int
    amount: Decimal
    total_amount: Decimal
    interest_free: bool


class InstallmentList(_Result):
    installments: list[InstallmentDetail] = Field(default_factory=list, alias="installment")


# =============================================================================
# Configuration Models
# =============================================================================


class Environment(str, Enum):
    PRODUCTION = "production"
    SANDBOX = "sandbox"

    @property
    def host(self) -> str:
        if self is Environment.SANDBOX:
            return "https://ws.sandbox.pagseguro.uol.com.br"
        return "https://ws.pagseguro.uol.com.br"


class ClientConfig(BaseModel):
    """Top-level client configuration file structure."""

    model_config = ConfigDict(extra="forbid")

    environment: Environment = Field(default=Environment.PRODUCTION)
    email: str = Field(min_length=1, description="Seller account e-mail")
    token: str = Field(min_length=1, description="Seller API token (supports ${ENV_VAR})")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    response_line_separator: str = Field(
        default="", description="Joins response body lines; empty drops line terminators"
    )
    headers: dict[str, str] = Field(
        default_factory=dict, description="Extra headers sent with every request"
    )
