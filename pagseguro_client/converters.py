"""Converters - flatten domain objects into RequestMaps.

Each converter is a pure function: same input, same map, no I/O. Optional
fields that are unset are left out of the map rather than sent empty.
Nested objects are converted on their own and merged with a key prefix, so
an Address is written once and reused for shipping and billing.
"""

from __future__ import annotations

from pagseguro_client.models import (
    Address,
    Bank,
    CreditCard,
    DirectPaymentRegistration,
    Document,
    Holder,
    InstallmentRequest,
    PaymentItem,
    Phone,
    Sender,
    Shipping,
    TransactionIdentify,
)
from pagseguro_client.request_map import RequestMap

DEFAULT_PAYMENT_MODE = "default"


def convert_transaction_identify(transaction: TransactionIdentify) -> RequestMap:
    request_map = RequestMap()
    request_map.put_string("transactionCode", transaction.code)
    return request_map


def convert_phone(phone: Phone) -> RequestMap:
    request_map = RequestMap()
    request_map.put_string("areaCode", phone.area_code)
    request_map.put_string("phone", phone.number)
    return request_map


def convert_document(document: Document) -> RequestMap:
    """The document type is the key: ``CPF=...`` or ``CNPJ=...``."""
    request_map = RequestMap()
    request_map.put_string(document.type.value, document.value)
    return request_map


def convert_address(address: Address) -> RequestMap:
    """Unprefixed address keys; callers merge under shippingAddress/billingAddress."""
    request_map = RequestMap()
    request_map.put_string("street", address.street)
    request_map.put_string("number", address.number)
    request_map.put_string("complement", address.complement, optional=True)
    request_map.put_string("district", address.district)
    request_map.put_string("postalCode", address.postal_code)
    request_map.put_string("city", address.city)
    request_map.put_string("state", address.state)
    request_map.put_string("country", address.country)
    return request_map


def convert_sender(sender: Sender) -> RequestMap:
    request_map = RequestMap()
    request_map.put_string("senderName", sender.name)
    request_map.put_string("senderEmail", sender.email)
    if sender.phone is not None:
        request_map.put_map(convert_phone(sender.phone), prefix="sender")
    if sender.document is not None:
        request_map.put_map(convert_document(sender.document), prefix="sender")
    request_map.put_string("senderHash", sender.hash, optional=True)
    return request_map


def convert_items(items: tuple[PaymentItem, ...] | list[PaymentItem]) -> RequestMap:
    """Items are numbered from 1: itemId1, itemDescription1, itemId2, ..."""
    request_map = RequestMap()
    for index, item in enumerate(items, start=1):
        request_map.put_string(f"itemId{index}", item.id)
        request_map.put_string(f"itemDescription{index}", item.description)
        request_map.put_currency(f"itemAmount{index}", item.amount)
        request_map.put_integer(f"itemQuantity{index}", item.quantity)
    return request_map


def convert_shipping(shipping: Shipping) -> RequestMap:
    request_map = RequestMap()
    if shipping.address_required is not None:
        request_map.put_string(
            "shippingAddressRequired", "true" if shipping.address_required else "false"
        )
    if shipping.type is not None:
        request_map.put_integer("shippingType", int(shipping.type))
    request_map.put_currency("shippingCost", shipping.cost, optional=True)
    if shipping.address is not None:
        request_map.put_map(convert_address(shipping.address), prefix="shippingAddress")
    return request_map


def convert_holder(holder: Holder) -> RequestMap:
    """Unprefixed holder keys; the credit card converter prefixes them."""
    request_map = RequestMap()
    request_map.put_string("name", holder.name)
    request_map.put_map(convert_document(holder.document))
    request_map.put_date("birthDate", holder.birth_date)
    if holder.phone is not None:
        request_map.put_map(convert_phone(holder.phone))
    return request_map


def convert_credit_card(credit_card: CreditCard) -> RequestMap:
    request_map = RequestMap()
    request_map.put_string("creditCardToken", credit_card.token)
    request_map.put_integer("installmentQuantity", credit_card.installment_quantity)
    request_map.put_currency("installmentValue", credit_card.installment_value)
    request_map.put_integer(
        "noInterestInstallmentQuantity",
        credit_card.no_interest_installment_quantity,
        optional=True,
    )
    request_map.put_map(convert_holder(credit_card.holder), prefix="creditCardHolder")
    if credit_card.billing_address is not None:
        request_map.put_map(
            convert_address(credit_card.billing_address), prefix="billingAddress"
        )
    return request_map


def convert_bank(bank: Bank) -> RequestMap:
    request_map = RequestMap()
    request_map.put_string("bankName", bank.name.value)
    return request_map


def convert_direct_payment_registration(
    registration: DirectPaymentRegistration,
) -> RequestMap:
    """Common part of every direct payment. The caller adds paymentMethod
    and the method-specific map (credit card, bank)."""
    request_map = RequestMap()
    request_map.put_string("paymentMode", DEFAULT_PAYMENT_MODE)
    request_map.put_string("currency", registration.currency)
    request_map.put_string("receiverEmail", registration.receiver_email, optional=True)
    request_map.put_string("reference", registration.reference, optional=True)
    request_map.put_string("notificationURL", registration.notification_url, optional=True)
    request_map.put_currency("extraAmount", registration.extra_amount, optional=True)
    request_map.put_map(convert_sender(registration.sender))
    request_map.put_map(convert_items(registration.items))
    if registration.shipping is not None:
        request_map.put_map(convert_shipping(registration.shipping))
    return request_map


def convert_installment_request(installment: InstallmentRequest) -> RequestMap:
    request_map = RequestMap()
    request_map.put_currency("amount", installment.amount)
    request_map.put_string("cardBrand", installment.card_brand, optional=True)
    request_map.put_integer(
        "maxInstallmentNoInterest", installment.max_installment_no_interest, optional=True
    )
    return request_map
