# gac_scanner/config.py
import os
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
import yaml  # For config file
from .errors import ConfigError
from .gac import DEFAULT_VENDOR_MARKER
from .version import COMPARATORS, DEFAULT_COMPARISON

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "oragac.yaml"
OUTPUT_FORMATS = ("text", "json")


def _program_files(env_var: str, fallback: str) -> Path:
    return Path(os.environ.get(env_var) or fallback)


def default_inventory_locations() -> dict:
    """Oracle base directories under the 32-bit and 64-bit Program Files roots, in reading order."""
    return {
        "32-bit": _program_files("ProgramFiles(x86)", "C:/Program Files (x86)") / "Oracle",
        "64-bit": _program_files("ProgramFiles", "C:/Program Files") / "Oracle",
    }


def default_gac_roots() -> list:
    assembly_dir = Path(os.environ.get("WINDIR") or "C:/Windows") / "assembly"
    return [assembly_dir / "GAC_32", assembly_dir / "GAC_64"]


@dataclass
class ScanConfig:
    inventory_locations: dict = field(default_factory=default_inventory_locations)
    gac_roots: list = field(default_factory=default_gac_roots)
    vendor_marker: str = DEFAULT_VENDOR_MARKER
    comparison: str = DEFAULT_COMPARISON
    output_format: str = "text"
    output_file: Path | None = None

    def with_overrides(self, **overrides) -> "ScanConfig":
        """Returns a copy with every non-None override applied (CLI flags win over the file)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return validate_config(replace(self, **changes))


def validate_config(config: ScanConfig) -> ScanConfig:
    if config.comparison.lower() not in COMPARATORS:
        raise ConfigError(f"Unknown version comparison '{config.comparison}'. Choose one of: {', '.join(COMPARATORS)}")
    if config.output_format.lower() not in OUTPUT_FORMATS:
        raise ConfigError(f"Unknown output format '{config.output_format}'. Choose one of: {', '.join(OUTPUT_FORMATS)}")
    if not config.vendor_marker:
        raise ConfigError("vendor_marker must not be empty.")
    if not config.inventory_locations:
        raise ConfigError("At least one inventory location is required.")
    config.comparison = config.comparison.lower()
    config.output_format = config.output_format.lower()
    return config


def load_config_file(config_path=CONFIG_FILENAME) -> dict:
    config = {}
    path = Path(config_path)
    if path.is_file():
        logger.info(f"Attempting to load configuration from '{path.resolve()}'...")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded_yaml = yaml.safe_load(f)
            if isinstance(loaded_yaml, dict):
                config = loaded_yaml
                logger.info(f"Successfully loaded configuration from {path.resolve()}")
            elif loaded_yaml is not None:
                logger.warning(f"Config file '{path.resolve()}' does not contain a valid dictionary structure.")
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML configuration file '{path.resolve()}': {e}")
        except OSError as e:
            logger.error(f"Could not read configuration file '{path.resolve()}': {e}")
        except UnicodeDecodeError as e:
            logger.error(f"Configuration file '{path.resolve()}' is not valid UTF-8: {e}")
    else:
        logger.info(f"Configuration file '{config_path}' not found. Using defaults/CLI args.")
    return config


def _as_path_mapping(value) -> dict:
    if not isinstance(value, dict) or not all(isinstance(v, str) for v in value.values()):
        raise ConfigError(f"'inventory_locations' must map labels to directories. Found: {value!r}")
    return {str(label): Path(location) for label, location in value.items()}


def _as_path_list(value) -> list:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'gac_roots' must be a list of directories. Found: {value!r}")
    return [Path(v) for v in value]


def load_config(config_path=CONFIG_FILENAME) -> ScanConfig:
    """Builds a ScanConfig from defaults and the optional YAML file."""
    raw = load_config_file(config_path)
    config = ScanConfig()
    if "inventory_locations" in raw:
        config.inventory_locations = _as_path_mapping(raw["inventory_locations"])
    if "gac_roots" in raw:
        config.gac_roots = _as_path_list(raw["gac_roots"])
    if raw.get("vendor_marker") is not None:
        config.vendor_marker = str(raw["vendor_marker"])
    if "comparison" in raw:
        config.comparison = str(raw["comparison"])
    if "format" in raw:
        config.output_format = str(raw["format"])
    if raw.get("output_file"):
        config.output_file = Path(raw["output_file"])
    return validate_config(config)
