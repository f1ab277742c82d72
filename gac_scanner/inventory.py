# gac_scanner/inventory.py
"""
Oracle inventory reader.
Pulls the installed client version out of Inventory/ContentsXML/inventory.xml.
"""

import logging
from pathlib import Path
from lxml import etree as ET
from .errors import InventoryReadError, XmlParseError, VersionNotFound

logger = logging.getLogger(__name__)

VERSION_TAG = "SAVED_WITH"
INVENTORY_RELATIVE_PATH = Path("Inventory") / "ContentsXML" / "inventory.xml"


def inventory_path(oracle_base) -> Path:
    """Returns the inventory.xml location below an Oracle base directory (e.g. C:/Program Files/Oracle)."""
    return Path(oracle_base) / INVENTORY_RELATIVE_PATH


class SavedWithTarget:
    """
    lxml parser target that captures the text directly following a SAVED_WITH start tag.

    Only the character data block immediately after the start tag is taken; any tag
    event ends the block and disarms the capture until the next SAVED_WITH starts.
    The last non-empty capture in document order wins.
    """

    def __init__(self, tag: str = VERSION_TAG):
        self.tag = tag
        self.version = None
        self._armed = False
        self._block = []

    def start(self, tag, attrib):
        self._finish_block()
        if tag == self.tag:
            self._armed = True

    def end(self, tag):
        self._finish_block()

    def data(self, data):
        if self._armed:
            self._block.append(data)

    def close(self):
        self._finish_block()
        return self.version

    def _finish_block(self):
        if not self._armed:
            return
        captured = "".join(self._block).strip()
        if captured:
            self.version = captured
        self._armed = False
        self._block = []


def parse_installed_version(document: bytes, source_hint: str = "input") -> str:
    """Parses inventory XML and returns the SAVED_WITH version string."""
    target = SavedWithTarget()
    parser = ET.XMLParser(target=target, resolve_entities=False)
    try:
        version = ET.fromstring(document, parser=parser)
    except ET.XMLSyntaxError as e:
        raise XmlParseError(f"Could not parse inventory XML ({source_hint}): {e}") from e
    if not version:
        raise VersionNotFound(f"Oracle version not found in inventory ({source_hint}).")
    logger.debug(f"Found {VERSION_TAG} version '{version}' in {source_hint}")
    return version


def read_inventory_file(path) -> bytes:
    """Reads the raw inventory document. Bytes are kept so lxml honours the XML encoding declaration."""
    path = Path(path)
    logger.debug(f"Reading Oracle inventory from {path}")
    try:
        return path.read_bytes()
    except OSError as e:
        raise InventoryReadError(f"Could not read Oracle inventory '{path}': {e}") from e
