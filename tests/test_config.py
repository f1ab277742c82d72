import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

# Add parent directory to path so we can import our modules
sys.path.append(str(Path(__file__).parent.parent))

from gac_scanner.config import ScanConfig, load_config
from gac_scanner.errors import ConfigError

WINDOWS_ENV = {"ProgramFiles": "D:/PF", "ProgramFiles(x86)": "D:/PF86", "WINDIR": "D:/Win"}


class TestScanConfig(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.dir = Path(tmp.name)

    def write_config(self, text: str) -> Path:
        path = self.dir / "oragac.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    @mock.patch.dict(os.environ, WINDOWS_ENV)
    def test_defaults_follow_windows_environment(self):
        config = load_config(self.dir / "missing.yaml")
        self.assertEqual(config.inventory_locations, {
            "32-bit": Path("D:/PF86") / "Oracle",
            "64-bit": Path("D:/PF") / "Oracle",
        })
        self.assertEqual(config.gac_roots, [Path("D:/Win/assembly/GAC_32"), Path("D:/Win/assembly/GAC_64")])
        self.assertEqual(config.vendor_marker, "Oracle")
        self.assertEqual(config.comparison, "lexicographic")
        self.assertEqual(config.output_format, "text")
        self.assertIsNone(config.output_file)

    def test_file_overrides_defaults(self):
        path = self.write_config(
            "inventory_locations:\n"
            "  64-bit: 'E:/Oracle'\n"
            "gac_roots:\n"
            "  - 'E:/assembly/GAC_64'\n"
            "  - 'E:/assembly/GAC_MSIL'\n"
            "comparison: Numeric\n"
            "format: json\n"
            "output_file: 'out/report.json'\n"
        )
        config = load_config(path)
        self.assertEqual(config.inventory_locations, {"64-bit": Path("E:/Oracle")})
        self.assertEqual([root.name for root in config.gac_roots], ["GAC_64", "GAC_MSIL"])
        self.assertEqual(config.comparison, "numeric")
        self.assertEqual(config.output_format, "json")
        self.assertEqual(config.output_file, Path("out/report.json"))

    def test_unparseable_file_falls_back_to_defaults(self):
        path = self.write_config("gac_roots: [unterminated\n")
        with self.assertLogs("gac_scanner.config", level="ERROR"):
            config = load_config(path)
        self.assertEqual(len(config.gac_roots), 2)

    def test_non_utf8_file_falls_back_to_defaults(self):
        path = self.dir / "oragac.yaml"
        path.write_bytes(b"vendor_marker: \xff\xfe\n")
        with self.assertLogs("gac_scanner.config", level="ERROR"):
            config = load_config(path)
        self.assertEqual(config.vendor_marker, "Oracle")
        self.assertEqual(len(config.gac_roots), 2)

    def test_null_vendor_marker_keeps_default(self):
        config = load_config(self.write_config("vendor_marker: null\n"))
        self.assertEqual(config.vendor_marker, "Oracle")

    def test_invalid_values(self):
        for text in ("comparison: semantic\n", "format: html\n", "gac_roots: 'C:/Windows/assembly'\n",
                     "inventory_locations: []\n", "vendor_marker: ''\n"):
            with self.subTest(config=text):
                with self.assertRaises(ConfigError):
                    load_config(self.write_config(text))

    def test_cli_overrides(self):
        config = ScanConfig().with_overrides(output_format="JSON", comparison=None, output_file=None)
        self.assertEqual(config.output_format, "json")
        self.assertEqual(config.comparison, "lexicographic")
        with self.assertRaises(ConfigError):
            ScanConfig().with_overrides(comparison="semantic")


if __name__ == '__main__':
    unittest.main()
