"""Xml sink — serializes the untouched value sequence to a file.

Serialization is delegated to an ``ObjectSerializer``.  The default
``XmlObjectSerializer`` writes an ``<Objs>`` document with one typed
element per value and can read it back.
"""

from __future__ import annotations

import base64
import logging
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from fanout.models.destinations import Destination
from fanout.models.results import RenderedBatch

logger = logging.getLogger(__name__)


@runtime_checkable
class ObjectSerializer(Protocol):
    """Persists a value sequence to *path*."""

    def dump(self, values: list[Any], path: Path) -> None:
        ...


def _element(value: Any) -> ET.Element:
    if value is None:
        return ET.Element("Nil")
    if isinstance(value, bool):
        node = ET.Element("B")
        node.text = "true" if value else "false"
        return node
    if isinstance(value, int):
        node = ET.Element("I")
        node.text = str(value)
        return node
    if isinstance(value, float):
        node = ET.Element("D")
        node.text = repr(value)
        return node
    if isinstance(value, str):
        node = ET.Element("S")
        node.text = value
        return node
    if isinstance(value, (bytes, bytearray)):
        node = ET.Element("BA")
        node.text = base64.b64encode(bytes(value)).decode("ascii")
        return node
    if isinstance(value, datetime):
        node = ET.Element("DT")
        node.text = value.isoformat()
        return node
    if isinstance(value, BaseModel):
        node = _element(value.model_dump(mode="json"))
        node.set("T", type(value).__qualname__)
        return node
    if isinstance(value, Mapping):
        node = ET.Element("Map")
        for key, item in value.items():
            entry = ET.SubElement(node, "En", {"K": str(key)})
            entry.append(_element(item))
        return node
    if isinstance(value, (list, tuple, set, frozenset)):
        node = ET.Element("List")
        for item in value:
            node.append(_element(item))
        return node
    node = ET.Element("S", {"T": type(value).__qualname__})
    node.text = str(value)
    return node


def _value(node: ET.Element) -> Any:
    text = node.text or ""
    tag = node.tag
    if tag == "Nil":
        return None
    if tag == "B":
        return text == "true"
    if tag == "I":
        return int(text)
    if tag == "D":
        return float(text)
    if tag == "BA":
        return base64.b64decode(text)
    if tag == "DT":
        return datetime.fromisoformat(text)
    if tag == "Map":
        return {entry.get("K"): _value(entry[0]) for entry in node}
    if tag == "List":
        return [_value(child) for child in node]
    return text


class XmlObjectSerializer:
    """Typed XML persistence for value sequences.

    Types outside the supported set are stored as their string form with
    the original type name recorded in a ``T`` attribute.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def dump(self, values: list[Any], path: Path) -> None:
        root = ET.Element("Objs", {"Version": "1"})
        for value in values:
            root.append(_element(value))
        tree = ET.ElementTree(root)
        ET.indent(tree)
        path.parent.mkdir(parents=True, exist_ok=True)
        tree.write(path, encoding=self._encoding, xml_declaration=True)

    def load(self, path: Path) -> list[Any]:
        root = ET.parse(path).getroot()
        return [_value(child) for child in root]


class XmlFileSink:
    """Hands the raw values and the target path to a serializer.

    Honors ``dry_run`` on the request: the write is logged, not performed.
    """

    def __init__(self, serializer: ObjectSerializer | None = None) -> None:
        self._serializer = serializer or XmlObjectSerializer()

    @property
    def sink_name(self) -> str:
        return "xml_file"

    @property
    def destination(self) -> Destination:
        return Destination.XML

    def accept(self, batch: RenderedBatch) -> None:
        if batch.path is None:
            raise ValueError("Xml requires a path")
        target = Path(batch.path)
        if batch.request.dry_run:
            logger.info(
                "Dry run: would serialize %d value(s) to %s", len(batch.values), target
            )
            return
        self._serializer.dump(batch.values, target)
        logger.debug("XmlFileSink: wrote %d value(s) to %s", len(batch.values), target)
