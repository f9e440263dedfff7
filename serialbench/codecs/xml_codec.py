"""
XML codec built on `xml.etree.ElementTree`.

Rendering is element-per-field: mappings become nested elements, lists become
repeated sibling elements sharing the field name, and scalars become element
text. The converter only produces the inner elements, so the codec wraps them
in a single `<root>` container.

Decoding mirrors a "compact" XML-to-dict conversion: text-only elements become
strings, repeated siblings become lists, and a single occurrence stays a
scalar. Type information and one-element lists are therefore not recoverable.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Mapping

from serialbench.codecs.abstract import AbstractCodec

ROOT_TAG = "root"


def _render_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _to_elements(tag: str, value: Any) -> List[ET.Element]:
    if isinstance(value, (list, tuple)):
        return [element for item in value for element in _to_elements(tag, item)]
    element = ET.Element(tag)
    if isinstance(value, Mapping):
        for key, child in value.items():
            element.extend(_to_elements(key, child))
    elif value is not None:
        element.text = _render_scalar(value)
    return [element]


def dict_to_xml(payload: Mapping[str, Any]) -> str:
    """Render a mapping as concatenated top-level elements (no container)."""
    return "".join(
        ET.tostring(element, encoding="unicode")
        for key, value in payload.items()
        for element in _to_elements(key, value)
    )


def _element_to_value(element: ET.Element) -> Any:
    children = list(element)
    if not children:
        return element.text or ""
    out: Dict[str, Any] = {}
    for child in children:
        value = _element_to_value(child)
        if child.tag not in out:
            out[child.tag] = value
        elif isinstance(out[child.tag], list):
            out[child.tag].append(value)
        else:
            out[child.tag] = [out[child.tag], value]
    return out


def xml_to_dict(data: bytes) -> Dict[str, Any]:
    root = ET.fromstring(data)
    return {root.tag: _element_to_value(root)}


class XmlCodec(AbstractCodec):
    """Element-per-field XML wrapped in a `<root>` container."""

    name: str = "xml"
    description: str = "Element-per-field XML wrapped in a root container."
    filename: str = "data.xml"

    def encode(self, payload: Dict[str, Any]) -> bytes:
        return f"<{ROOT_TAG}>\n{dict_to_xml(payload)}\n</{ROOT_TAG}>".encode("utf-8")

    def decode(self, data: bytes) -> Dict[str, Any]:
        return xml_to_dict(data)


__all__ = ["ROOT_TAG", "XmlCodec", "dict_to_xml", "xml_to_dict"]
