"""XML text → field mapping for service responses.

Service documents are plain element trees: no attributes, no namespaces,
no mixed content. A document is read as its root tag plus a mapping of the
root's child elements, which is what the decoder validates.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections import defaultdict
from typing import Any


def parse_document(
    text: str,
    force_list: set[str] | frozenset[str] = frozenset(),
) -> tuple[str, dict[str, Any]]:
    """Read a service document.

    Args:
        text: Decoded response body. An XML declaration naming another
            encoding is fine: the text is already decoded.
        force_list: Tag names that always map to a list, even with a single
            occurrence (``{"item"}`` for ``<items><item>...</item></items>``).

    Returns:
        ``(root_tag, fields)``. A root holding only text, like
        ``<result>OK</result>``, is read as ``{"result": "OK"}``; an empty
        root has no fields.

    Raises:
        ET.ParseError: If *text* is not well-formed XML.
    """
    root = ET.fromstring(text)
    if len(root):
        return root.tag, _fields(root, frozenset(force_list))
    value = _leaf(root)
    return root.tag, {root.tag: value} if value is not None else {}


def _leaf(element: ET.Element) -> str | None:
    return (element.text or "").strip() or None


def _fields(element: ET.Element, force_list: frozenset[str]) -> dict[str, Any]:
    # Repeated siblings become a list; so does any tag in force_list.
    grouped: defaultdict[str, list[Any]] = defaultdict(list)
    for child in element:
        value = _fields(child, force_list) if len(child) else _leaf(child)
        grouped[child.tag].append(value)
    return {
        tag: values if tag in force_list or len(values) > 1 else values[0]
        for tag, values in grouped.items()
    }
