# gac_scanner/models.py
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

VERSION_KEY_SEPARATOR = "__"


class Architecture(Enum):
    X86 = "x86"
    AMD64 = "AMD64"
    MSIL = "MSIL"
    UNKNOWN = "##Unknown Architecture##"

    @classmethod
    def from_gac_tag(cls, tag: str) -> "Architecture":
        """Maps a GAC root folder name (GAC_32, GAC_64, GAC_MSIL) to its processor architecture."""
        return GAC_TAG_ARCHITECTURES.get(tag, cls.UNKNOWN)


GAC_TAG_ARCHITECTURES = {
    "GAC_32": Architecture.X86,
    "GAC_64": Architecture.AMD64,
    "GAC_MSIL": Architecture.MSIL,
}


@dataclass(frozen=True)
class GacEntry:
    vendor: str          # assembly folder, e.g. Oracle.DataAccess
    version_key: str     # raw folder name, e.g. 2.112.1.0__89b483f429c47342
    gac_tag: str         # name of the GAC root the entry was found under
    path: Optional[Path] = None

    @property
    def version(self) -> str:
        return self.version_key.split(VERSION_KEY_SEPARATOR, 1)[0]

    @property
    def public_key_token(self) -> Optional[str]:
        parts = self.version_key.split(VERSION_KEY_SEPARATOR)
        return parts[1] if len(parts) == 2 else None

    @property
    def architecture(self) -> Architecture:
        return Architecture.from_gac_tag(self.gac_tag)


@dataclass(frozen=True)
class InventoryReading:
    label: str
    path: Path
    version: str | None = None
    error: Exception | None = None

    @property
    def found(self) -> bool:
        return self.version is not None


@dataclass
class ReconciliationResult:
    installed_version: str
    expected_version: str
    inventories: list[InventoryReading] = field(default_factory=list)
    obsolete_assemblies: list[str] = field(default_factory=list)
