# gac_scanner/version.py
import re
import logging
from packaging.version import parse as parse_version, InvalidVersion
from .errors import VersionParseError, ConfigError

logger = logging.getLogger(__name__)

# Oracle client versions carry exactly five numeric groups, e.g. 12.1.0.2.0
INSTALLED_VERSION_PATTERN = re.compile(r'(\d+)\.(\d+)\.(\d+)\.(\d+)\.(\d+)')

DRIVER_VERSION_PREFIX = "2."


def to_driver_version(installed: str) -> str:
    """
    Reformats an Oracle client version to the .NET Oracle driver version string.

    Groups 1 and 2 are joined, groups 3 and 4 are joined with any "0" group dropped,
    and group 5 is carried as is. Groups are concatenated as text, never summed:
    12.1.0.2.0 -> 2.121.2.0, 11.2.0.3.0 -> 2.112.3.0, 12.2.0.0.0 -> 2.122..0
    """
    match = INSTALLED_VERSION_PATTERN.fullmatch(installed.strip())
    if not match:
        raise VersionParseError(f"Unable to parse Oracle version '{installed}'.")
    major, minor, patch, build, revision = match.groups()
    patch = "" if patch == "0" else patch
    build = "" if build == "0" else build
    return f"{DRIVER_VERSION_PREFIX}{major}{minor}.{patch}{build}.{revision}"


# --- Obsolescence checks: True means the GAC version should be removed ---

def is_obsolete_lexicographic(version: str, expected: str) -> bool:
    """Plain string ordering, so '9.0' sorts after '10.0'."""
    return version > expected


def _fill_empty_segments(version: str) -> str:
    return ".".join(part or "0" for part in version.split("."))


def is_obsolete_numeric(version: str, expected: str) -> bool:
    """Orders by release segments; falls back to string ordering when either side won't parse."""
    try:
        pv = parse_version(_fill_empty_segments(version))
        pe = parse_version(_fill_empty_segments(expected))
    except InvalidVersion:
        logger.warning(f"Numeric compare failed for '{version}' vs '{expected}', using string ordering")
        return is_obsolete_lexicographic(version, expected)
    return pv > pe


COMPARATORS = {
    "lexicographic": is_obsolete_lexicographic,
    "numeric": is_obsolete_numeric,
}
DEFAULT_COMPARISON = "lexicographic"


def get_comparator(name: str = DEFAULT_COMPARISON):
    try:
        return COMPARATORS[name.lower()]
    except (KeyError, AttributeError):
        raise ConfigError(f"Unknown version comparison '{name}'. Choose one of: {', '.join(COMPARATORS)}") from None
