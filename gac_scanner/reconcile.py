# gac_scanner/reconcile.py
"""
Reconciliation driver.

Runs the pipeline as a small state machine:
READ_INVENTORIES -> DERIVE_EXPECTED_VERSION -> SCAN_ROOTS -> REPORT -> DONE

Inventory failures are tolerated per location; everything else aborts the run.
The inventory reader and directory lister are injected so the driver can be
exercised without a real Oracle install or Windows GAC.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional
from .config import ScanConfig
from .errors import InventoryReadError, XmlParseError, VersionNotFound, NoInstallFound, VersionMismatch
from .gac import list_subdirectories, scan_gac
from .inventory import inventory_path, parse_installed_version, read_inventory_file
from .models import InventoryReading, ReconciliationResult
from .version import get_comparator, to_driver_version

logger = logging.getLogger(__name__)

TOLERATED_INVENTORY_ERRORS = (InventoryReadError, XmlParseError, VersionNotFound)


class State(Enum):
    READ_INVENTORIES = "read_inventories"
    DERIVE_EXPECTED_VERSION = "derive_expected_version"
    SCAN_ROOTS = "scan_roots"
    REPORT = "report"
    DONE = "done"


def reconcile_readings(readings: List[InventoryReading]) -> str:
    """Returns the single installed version the readings agree on."""
    found = [r for r in readings if r.found]
    if not found:
        raise NoInstallFound()
    if len({r.version for r in found}) > 1:
        raise VersionMismatch(found)
    return found[0].version


class ReconciliationDriver:
    def __init__(self, config: Optional[ScanConfig] = None,
                 read_inventory: Callable[[Path], bytes] = read_inventory_file,
                 list_dirs: Callable[[Path], List[str]] = list_subdirectories):
        self.config = config or ScanConfig()
        self.read_inventory = read_inventory
        self.list_dirs = list_dirs
        self.is_obsolete = get_comparator(self.config.comparison)
        self.state = State.READ_INVENTORIES

        self.readings: List[InventoryReading] = []
        self.installed_version: Optional[str] = None
        self.expected_version: Optional[str] = None
        self.obsolete_assemblies: List[str] = []
        self.result: Optional[ReconciliationResult] = None

        self._handlers = {
            State.READ_INVENTORIES: self._read_inventories,
            State.DERIVE_EXPECTED_VERSION: self._derive_expected_version,
            State.SCAN_ROOTS: self._scan_roots,
            State.REPORT: self._report,
        }

    def run(self) -> ReconciliationResult:
        while self.state is not State.DONE:
            self.state = self._handlers[self.state]()
        return self.result

    def detect(self) -> List[InventoryReading]:
        """Reads and reconciles the inventories only; leaves the driver ready to derive the expected version."""
        if self.state is State.READ_INVENTORIES:
            self.state = self._read_inventories()
        return self.readings

    def read_location(self, label: str, oracle_base) -> InventoryReading:
        path = inventory_path(oracle_base)
        try:
            version = parse_installed_version(self.read_inventory(path), source_hint=str(path))
        except TOLERATED_INVENTORY_ERRORS as e:
            logger.warning(f"No usable Oracle inventory ({label}): {e}")
            return InventoryReading(label=label, path=path, error=e)
        logger.info(f"Oracle {label} inventory reports version {version}")
        return InventoryReading(label=label, path=path, version=version)

    def _read_inventories(self) -> State:
        self.readings = [self.read_location(label, base)
                         for label, base in self.config.inventory_locations.items()]
        self.installed_version = reconcile_readings(self.readings)
        return State.DERIVE_EXPECTED_VERSION

    def _derive_expected_version(self) -> State:
        self.expected_version = to_driver_version(self.installed_version)
        logger.info(f"Expected .NET driver version is {self.expected_version}")
        return State.SCAN_ROOTS

    def _scan_roots(self) -> State:
        obsolete = []
        for root in self.config.gac_roots:
            obsolete.extend(scan_gac(root, self.expected_version, self.is_obsolete,
                                     list_dirs=self.list_dirs, vendor_marker=self.config.vendor_marker))
        self.obsolete_assemblies = obsolete
        return State.REPORT

    def _report(self) -> State:
        self.result = ReconciliationResult(
            installed_version=self.installed_version,
            expected_version=self.expected_version,
            inventories=list(self.readings),
            obsolete_assemblies=list(self.obsolete_assemblies),
        )
        return State.DONE


def reconcile(config: Optional[ScanConfig] = None, **collaborators) -> ReconciliationResult:
    return ReconciliationDriver(config, **collaborators).run()
