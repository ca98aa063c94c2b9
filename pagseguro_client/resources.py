"""Resources - the service operations built on the marshaling pipeline.

Every operation runs the same steps: convert the domain object into a
RequestMap, encode it (query string for GET, form body for POST), execute it
through the HttpTransport, then decode the answer into its ResponseShape.
Errors from any step propagate unchanged.

Usage:
    config = load_client_config(Path("pagseguro.yaml"))
    with PagSeguroClient(config) as client:
        client.transactions.refund_by_code("9E884542-81B3-4419-9A75-BCC6FB495EF1")
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from pagseguro_client.converters import (
    convert_bank,
    convert_credit_card,
    convert_direct_payment_registration,
    convert_installment_request,
    convert_transaction_identify,
)
from pagseguro_client.decoder import (
    INSTALLMENTS_SHAPE,
    RESULT_SHAPE,
    TRANSACTION_SHAPE,
    ResponseShape,
    ResultT,
    decode,
)
from pagseguro_client.models import (
    Bank,
    ClientConfig,
    CreditCard,
    DirectPaymentRegistration,
    HttpMethod,
    InstallmentDetail,
    InstallmentRequest,
    OperationResult,
    TransactionDetail,
    TransactionIdentify,
    TransactionMethod,
)
from pagseguro_client.request_map import CharSet, RequestMap
from pagseguro_client.transport import HttpTransport

logger = logging.getLogger(__name__)

DIRECT_PAYMENT_PATH = "/v2/transactions"
TRANSACTION_CANCEL_PATH = "/v2/transactions/cancels"
TRANSACTION_REFUND_PATH = "/v2/transactions/refunds"
INSTALLMENT_SEARCH_PATH = "/v2/installments"


class PagSeguroClient:
    """Entry point: holds the configuration, the transport and the resources.

    The transport is created from the configuration unless one is injected;
    only a transport created here is closed by close().
    """

    def __init__(self, config: ClientConfig, transport: HttpTransport | None = None) -> None:
        self._config = config
        self._owns_transport = transport is None
        self._transport = transport or HttpTransport(
            timeout=config.timeout,
            line_separator=config.response_line_separator,
        )
        self.transactions = TransactionsResource(self)
        self.installments = InstallmentsResource(self)

    def __enter__(self) -> "PagSeguroClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_transport:
            self._transport.close()

    @property
    def config(self) -> ClientConfig:
        return self._config

    def build_url(self, path: str, query: RequestMap | None = None) -> str:
        """Absolute URL for *path*, with credentials and *query* in UTF-8."""
        credentials = RequestMap()
        credentials.put_string("email", self._config.email)
        credentials.put_string("token", self._config.token)
        params = query.merged_with(credentials) if query is not None else credentials
        return f"{self._config.environment.host}{path}?{params.to_url_encode(CharSet.UTF_8)}"

    def call(
        self,
        method: HttpMethod,
        path: str,
        shape: ResponseShape[ResultT],
        query: RequestMap | None = None,
        body: RequestMap | None = None,
        charset: str = CharSet.ISO_8859_1,
    ) -> ResultT:
        """Encode, execute and decode one service call."""
        url = self.build_url(path, query)
        request_body = body.to_http_request_body(charset) if body is not None else None
        logger.debug("Parameters: %r", body if body is not None else query)

        response = self._transport.execute(method, url, self._config.headers, request_body)
        logger.debug("Response: %r", response)

        logger.info("Parsing XML response")
        result = decode(response, shape)
        logger.info("Parsing finished")
        return result


class TransactionsResource:
    """Cancel, refund and register transactions."""

    def __init__(self, client: PagSeguroClient) -> None:
        self._client = client

    def cancel(self, transaction: TransactionIdentify) -> OperationResult:
        logger.info("Starting transaction cancellation")
        request_map = convert_transaction_identify(transaction)
        result = self._client.call(
            HttpMethod.POST, TRANSACTION_CANCEL_PATH, RESULT_SHAPE, body=request_map
        )
        logger.info("Transaction cancellation finished")
        return result

    def cancel_by_code(self, code: str) -> OperationResult:
        return self.cancel(TransactionIdentify(code=code))

    def refund(
        self,
        transaction: TransactionIdentify,
        amount: Decimal | None = None,
    ) -> OperationResult:
        """Refund a transaction; without *amount* the whole value is refunded."""
        logger.info("Starting transaction refund")
        request_map = convert_transaction_identify(transaction)
        request_map.put_currency("refundValue", amount, optional=True)
        result = self._client.call(
            HttpMethod.POST, TRANSACTION_REFUND_PATH, RESULT_SHAPE, body=request_map
        )
        logger.info("Transaction refund finished")
        return result

    def refund_by_code(self, code: str, amount: Decimal | None = None) -> OperationResult:
        return self.refund(TransactionIdentify(code=code), amount)

    def register(self, registration: DirectPaymentRegistration) -> DirectPaymentResource:
        """Start a direct payment; pick the payment method on the result."""
        return DirectPaymentResource(self._client, registration)


class DirectPaymentResource:
    """A direct payment registration waiting for its payment method."""

    def __init__(self, client: PagSeguroClient, registration: DirectPaymentRegistration) -> None:
        self._client = client
        self._registration = registration

    def with_bank_slip(self) -> TransactionDetail:
        return self._pay(TransactionMethod.BANK_SLIP, None, "bank slip")

    def with_credit_card(self, credit_card: CreditCard) -> TransactionDetail:
        return self._pay(
            TransactionMethod.CREDIT_CARD, convert_credit_card(credit_card), "credit card"
        )

    def with_international_credit_card(self, credit_card: CreditCard) -> TransactionDetail:
        return self._pay(
            TransactionMethod.CREDIT_CARD,
            convert_credit_card(credit_card),
            "international credit card",
        )

    def with_online_debit(self, bank: Bank) -> TransactionDetail:
        return self._pay(TransactionMethod.ONLINE_DEBIT, convert_bank(bank), "online debit")

    def _pay(
        self,
        method: TransactionMethod,
        method_map: RequestMap | None,
        description: str,
    ) -> TransactionDetail:
        logger.info("Starting direct payment with %s", description)
        request_map = convert_direct_payment_registration(self._registration)
        request_map.put_string("paymentMethod", method.value)
        if method_map is not None:
            request_map.put_map(method_map)
        transaction = self._client.call(
            HttpMethod.POST, DIRECT_PAYMENT_PATH, TRANSACTION_SHAPE, body=request_map
        )
        logger.info("Direct payment with %s finished", description)
        return transaction


class InstallmentsResource:
    def __init__(self, client: PagSeguroClient) -> None:
        self._client = client

    def list(self, request: InstallmentRequest) -> list[InstallmentDetail]:
        """Installment options for an amount, optionally for one card brand."""
        logger.info("Starting installment listing")
        query = convert_installment_request(request)
        installments = self._client.call(
            HttpMethod.GET, INSTALLMENT_SEARCH_PATH, INSTALLMENTS_SHAPE, query=query
        )
        logger.info("Installment listing finished")
        return installments.installments
