"""Response Decoder - turns an HttpResponse into a typed result or a fault.

Every service answer is one XML document. A document rooted at <errors> is a
rejection and becomes a DecodeFault, whatever the status code. Any other
document must be rooted at the element the caller's ResponseShape names, and
its content is validated into the shape's pydantic model.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from pagseguro_client.errors import DecodeFault, MalformedResponse
from pagseguro_client.models import (
    HttpResponse,
    InstallmentList,
    OperationResult,
    ServiceError,
    TransactionDetail,
)
from pagseguro_client.xml_body import parse_document

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)

FAULT_ROOT = "errors"
FAULT_ENTRY = "error"


@dataclass(frozen=True)
class ResponseShape(Generic[ResultT]):
    """Describes the document a call expects.

    Attributes:
        root: Tag of the expected root element.
        model: Pydantic model validated against the root's content.
        force_list: Tags that are always lists, even with one occurrence.
    """

    root: str
    model: type[ResultT]
    force_list: frozenset[str] = field(default_factory=frozenset)


TRANSACTION_SHAPE = ResponseShape("transaction", TransactionDetail, frozenset({"item"}))
INSTALLMENTS_SHAPE = ResponseShape("installments", InstallmentList, frozenset({"installment"}))
RESULT_SHAPE = ResponseShape("result", OperationResult)


def decode(response: HttpResponse, shape: ResponseShape[ResultT]) -> ResultT:
    """Decode *response* into an instance of ``shape.model``.

    Raises:
        DecodeFault: The body is an <errors> document.
        MalformedResponse: The body is empty, not XML, rooted at an
            unexpected element, or missing fields the model requires.
    """
    if not response.body.strip():
        raise MalformedResponse("Empty response body", response.status_code, response.body)

    try:
        root, fields = parse_document(response.body, shape.force_list | {FAULT_ENTRY})
    except ET.ParseError as e:
        raise MalformedResponse(
            f"Response body is not well-formed XML: {e}", response.status_code, response.body
        ) from e

    if root == FAULT_ROOT:
        raise _build_fault(fields, response)

    if root != shape.root:
        raise MalformedResponse(
            f"Expected <{shape.root}> document, got <{root}>",
            response.status_code,
            response.body,
        )

    try:
        result = shape.model.model_validate(fields)
    except ValidationError as e:
        raise MalformedResponse(
            f"<{root}> document does not match {shape.model.__name__}: {e}",
            response.status_code,
            response.body,
        ) from e

    logger.debug("Decoded <%s> into %s", root, shape.model.__name__)
    return result


def _build_fault(fields: dict[str, Any], response: HttpResponse) -> DecodeFault:
    # FAULT_ENTRY is always forced to a list; a text-only <error> fails validation.
    entries = fields.get(FAULT_ENTRY, [])
    try:
        errors = [ServiceError.model_validate(entry) for entry in entries]
    except ValidationError as e:
        raise MalformedResponse(
            f"<errors> document has an invalid <error> entry: {e}",
            response.status_code,
            response.body,
        ) from e
    if not errors:
        raise MalformedResponse(
            "<errors> document carries no <error> entries",
            response.status_code,
            response.body,
        )
    logger.info("Service rejected request: %s", ", ".join(e.code for e in errors))
    return DecodeFault(errors, response.status_code)
