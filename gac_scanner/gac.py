# gac_scanner/gac.py
"""
Global Assembly Cache walker.
Handles the <GacRoot>/<AssemblyName>/<Version>__<PublicKeyToken>/ layout.
"""

import os
import logging
from pathlib import Path
from typing import Callable, Iterator, List
from .errors import DirectoryReadError, NonUnicodePathError, MalformedEntryError
from .models import Architecture, GacEntry, VERSION_KEY_SEPARATOR

logger = logging.getLogger(__name__)

DEFAULT_VENDOR_MARKER = "Oracle"

UNINSTALL_COMMAND_TEMPLATE = 'gacutil /u "{identity}"'


def _ensure_text(name: str, parent: Path) -> str:
    # os.scandir decodes undecodable bytes with surrogateescape; those names won't round-trip
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as e:
        raise NonUnicodePathError(f"Path component under '{parent}' is not valid Unicode: {name!r}") from e
    return name


def list_subdirectories(path: Path) -> List[str]:
    """Returns the names of the immediate subdirectories of path, sorted."""
    try:
        with os.scandir(path) as entries:
            names = [entry.name for entry in entries if entry.is_dir()]
    except OSError as e:
        raise DirectoryReadError(f"Could not list directory '{path}': {e}") from e
    return sorted(names)


def gac_tag_for_root(root) -> str:
    root = Path(root)
    return _ensure_text(root.name, root.parent)


def walk_gac_root(root, list_dirs: Callable[[Path], List[str]] = list_subdirectories,
                  vendor_marker: str = DEFAULT_VENDOR_MARKER) -> Iterator[GacEntry]:
    """Yields one GacEntry per version folder below every vendor folder whose name contains vendor_marker."""
    root = Path(root)
    gac_tag = gac_tag_for_root(root)
    logger.debug(f"Scanning GAC root {root} ({gac_tag})")
    for vendor in list_dirs(root):
        vendor = _ensure_text(vendor, root)
        if vendor_marker not in vendor:
            continue
        vendor_path = root / vendor
        logger.debug(f"Descending into vendor folder {vendor_path}")
        for version_key in list_dirs(vendor_path):
            version_key = _ensure_text(version_key, vendor_path)
            yield GacEntry(vendor=vendor, version_key=version_key, gac_tag=gac_tag, path=vendor_path / version_key)


def build_assembly_identity(entry: GacEntry) -> str:
    """
    Makes the fully qualified assembly name that gacutil /u accepts, e.g.
    Oracle.DataAccess, Version=2.112.1.0, Culture=neutral, PublicKeyToken=89b483f429c47342, processorArchitecture=AMD64
    """
    parts = entry.version_key.split(VERSION_KEY_SEPARATOR)
    if len(parts) != 2 or not all(parts):
        raise MalformedEntryError(
            f"Version folder '{entry.version_key}' under '{entry.vendor}' is not named <version>{VERSION_KEY_SEPARATOR}<publicKeyToken>")
    version, key = parts

    architecture = entry.architecture
    if architecture is Architecture.UNKNOWN:
        logger.warning(f"Unknown GAC architecture tag '{entry.gac_tag}' for {entry.vendor} {version}")

    return (f"{entry.vendor}, Version={version}, Culture=neutral, "
            f"PublicKeyToken={key}, processorArchitecture={architecture.value}")


def format_uninstall_command(identity: str) -> str:
    return UNINSTALL_COMMAND_TEMPLATE.format(identity=identity)


def scan_gac(root, expected: str, is_obsolete: Callable[[str, str], bool],
             list_dirs: Callable[[Path], List[str]] = list_subdirectories,
             vendor_marker: str = DEFAULT_VENDOR_MARKER) -> List[str]:
    """Scans one GAC root for vendor assemblies newer than expected. Any failure aborts the whole root."""
    obsolete = []
    for entry in walk_gac_root(root, list_dirs=list_dirs, vendor_marker=vendor_marker):
        if is_obsolete(entry.version, expected):
            logger.debug(f"  OBSOLETE: {entry.vendor} {entry.version} > {expected}")
            obsolete.append(build_assembly_identity(entry))
        else:
            logger.debug(f"  keep: {entry.vendor} {entry.version}")
    return obsolete
