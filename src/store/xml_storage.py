"""XML document storage adapter.

Files hold one root element with a child element per record and one
sub-element per field. Unknown elements are ignored on read.
"""

from __future__ import annotations

import re
from typing import Sequence
import xml.etree.ElementTree as ET

from core.constants import FILE_ENCODING, XML_INDENT
from core.errors import ShelfDecodeError, ShelfEncodeError
from core.types import RecordT
from store.record_storage import RecordFileStorage

_XML_ILLEGAL_CHARS = re.compile(r"[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


class XmlRecordStorage(RecordFileStorage[RecordT]):
    """Read and write record collections as XML documents."""

    format_name = "xml"

    def _decode(self, data: bytes) -> list[RecordT]:
        """Decode an XML document into records.

        Args:
            data: Raw file bytes.

        Returns:
            Records in document order.

        Raises:
            ShelfDecodeError: If the document is malformed or has the wrong root.
        """
        try:
            root = ET.fromstring(data)
        except ET.ParseError as error:
            raise ShelfDecodeError(f"XML deserialization error: {error}") from error
        if root.tag != self._schema.collection_tag:
            raise ShelfDecodeError(
                f"XML deserialization error: expected root <{self._schema.collection_tag}>, "
                f"got <{root.tag}>"
            )
        records: list[RecordT] = []
        for element in root.findall(self._schema.item_tag):
            texts = {child.tag: child.text for child in element}
            records.append(self._schema.from_texts(texts))
        return records

    def _encode(self, records: Sequence[RecordT]) -> bytes:
        """Encode records as an indented XML document.

        Raises:
            ShelfEncodeError: If a field value cannot be represented in XML.
        """
        root = ET.Element(self._schema.collection_tag)
        for index, record in enumerate(records):
            element = ET.SubElement(root, self._schema.item_tag)
            for wire_name, text in self._schema.to_texts(record).items():
                if _XML_ILLEGAL_CHARS.search(text):
                    raise ShelfEncodeError(
                        f"Cannot write field '{wire_name}' of record {index}: "
                        "text contains characters that XML 1.0 does not allow."
                    )
                ET.SubElement(element, wire_name).text = text
        tree = ET.ElementTree(root)
        ET.indent(tree, space=XML_INDENT)
        return ET.tostring(root, encoding=FILE_ENCODING, xml_declaration=True) + b"\n"
