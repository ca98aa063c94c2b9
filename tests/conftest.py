"""Pytest configuration and fixtures for pagseguro-client tests.

This file provides:
- make_http_response: HttpResponse builder with sensible defaults
- make_transport: HttpTransport wired to an in-process httpx.MockTransport
- Sample service documents (transaction, installments, result, errors)
- Fixtures: client config and representative domain objects
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Callable

import httpx
import pytest

from pagseguro_client.models import (
    Address,
    ClientConfig,
    CreditCard,
    DirectPaymentRegistration,
    Document,
    Environment,
    Holder,
    HttpResponse,
    PaymentItem,
    Phone,
    Sender,
)
from pagseguro_client.transport import HttpTransport

Handler = Callable[[httpx.Request], httpx.Response]


TRANSACTION_XML = (
    '<?xml version="1.0" encoding="ISO-8859-1" standalone="yes"?>'
    "<transaction>"
    "<date>2016-11-09T00:00:00.000-02:00</date>"
    "<code>9E884542-81B3-4419-9A75-BCC6FB495EF1</code>"
    "<reference>REF1234</reference>"
    "<type>1</type>"
    "<status>1</status>"
    "<lastEventDate>2016-11-09T00:00:01.000-02:00</lastEventDate>"
    "<paymentMethod><type>2</type><code>202</code></paymentMethod>"
    "<paymentLink>https://sandbox.pagseguro.uol.com.br/checkout/imprimeBoleto.jhtml?code=abc</paymentLink>"
    "<grossAmount>300.02</grossAmount>"
    "<discountAmount>0.00</discountAmount>"
    "<feeAmount>15.38</feeAmount>"
    "<netAmount>284.64</netAmount>"
    "<extraAmount>0.00</extraAmount>"
    "<installmentCount>1</installmentCount>"
    "<itemCount>1</itemCount>"
    "<items><item><id>0001</id><description>Notebook Prata</description>"
    "<quantity>1</quantity><amount>300.02</amount></item></items>"
    "<sender><name>Jose Comprador</name><email>comprador@sandbox.pagseguro.com.br</email></sender>"
    "</transaction>"
)

INSTALLMENTS_XML = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    "<installments>"
    "<installment><cardBrand>visa</cardBrand><quantity>1</quantity>"
    "<amount>500.00</amount><totalAmount>500.00</totalAmount><interestFree>true</interestFree></installment>"
    "<installment><cardBrand>visa</cardBrand><quantity>2</quantity>"
    "<amount>256.28</amount><totalAmount>512.56</totalAmount><interestFree>false</interestFree></installment>"
    "</installments>"
)

RESULT_OK_XML = '<?xml version="1.0" encoding="ISO-8859-1"?><result>OK</result>'

ERRORS_XML = (
    '<?xml version="1.0" encoding="ISO-8859-1" standalone="yes"?>'
    "<errors>"
    "<error><code>53004</code><message>items invalid quantity.</message></error>"
    "<error><code>53010</code><message>sender email is required.</message></error>"
    "</errors>"
)


def make_http_response(status_code: int = 200, body: str = "") -> HttpResponse:
    """Create an HttpResponse for decoder tests."""
    return HttpResponse(status_code=status_code, body=body)


def xml_response(
    body: str,
    status_code: int = 200,
    charset: str | None = "ISO-8859-1",
) -> httpx.Response:
    """httpx.Response carrying *body* encoded in *charset* (ISO-8859-1 if None)."""
    content_type = f"application/xml;charset={charset}" if charset else None
    headers = {"Content-Type": content_type} if content_type else {}
    return httpx.Response(
        status_code,
        headers=headers,
        content=body.encode(charset or "ISO-8859-1"),
    )


def make_transport(handler: Handler, **kwargs: Any) -> HttpTransport:
    """HttpTransport whose requests are answered in-process by *handler*."""
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpTransport(client=client, **kwargs)


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(
        environment=Environment.SANDBOX,
        email="seller@example.com",
        token="SECRET-TOKEN",
    )


@pytest.fixture
def address() -> Address:
    return Address(
        street="Av. Brig. Faria Lima",
        number="1384",
        complement="5o andar",
        district="Jardim Paulistano",
        city="Sao Paulo",
        state="SP",
        postal_code="01452002",
    )


@pytest.fixture
def registration() -> DirectPaymentRegistration:
    return DirectPaymentRegistration(
        reference="REF1234",
        sender=Sender(
            name="José Comprador",
            email="comprador@sandbox.pagseguro.com.br",
            phone=Phone(area_code="11", number="56273440"),
            document=Document(value="22111944785"),
            hash="abc123hash",
        ),
        items=(
            PaymentItem(
                id="0001",
                description="Notebook Prata",
                amount=Decimal("300.02"),
                quantity=1,
            ),
        ),
    )


@pytest.fixture
def credit_card(address: Address) -> CreditCard:
    return CreditCard(
        token="4as56d4a56d456as456dsa",
        installment_quantity=1,
        installment_value=Decimal("300.02"),
        holder=Holder(
            name="Jose Comprador",
            document=Document(value="22111944785"),
            birth_date=date(1975, 5, 27),
            phone=Phone(area_code="11", number="56273440"),
        ),
        billing_address=address,
    )
