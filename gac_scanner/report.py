# gac_scanner/report.py
import json
from pathlib import Path
from .errors import ReportWriteError
from .gac import format_uninstall_command
from .models import ReconciliationResult

NO_OBSOLETE_MESSAGE = "No incompatible assemblies found to remove."


def render_text_report(result: ReconciliationResult) -> str:
    lines = [
        "",
        f"Expected .NET version is: {result.expected_version}",
        "-" * 35,
    ]
    if not result.obsolete_assemblies:
        lines.append(NO_OBSOLETE_MESSAGE)
    for identity in result.obsolete_assemblies:
        lines.append(format_uninstall_command(identity))
    return "\n".join(lines) + "\n"


def render_json_report(result: ReconciliationResult) -> str:
    output_data = {
        "installedVersion": result.installed_version,
        "expectedVersion": result.expected_version,
        "inventories": [
            {
                "label": reading.label,
                "path": str(reading.path),
                "version": reading.version,
                "error": str(reading.error) if reading.error else None,
            }
            for reading in result.inventories
        ],
        "obsoleteAssemblies": list(result.obsolete_assemblies),
        "commands": [format_uninstall_command(identity) for identity in result.obsolete_assemblies],
    }
    return json.dumps(output_data, indent=2) + "\n"


RENDERERS = {
    "text": render_text_report,
    "json": render_json_report,
}


def render_report(result: ReconciliationResult, output_format: str = "text") -> str:
    return RENDERERS[output_format](result)


def write_report(content: str, output_filename) -> Path:
    path = Path(output_filename)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
    except OSError as e:
        raise ReportWriteError(f"Could not write report to {output_filename}: {e}") from e
    return path
