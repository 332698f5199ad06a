import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

import keyfold.config as config_module
from keyfold.cli.app import app
from keyfold.config import ConfigManager

FIXTURE = Path(__file__).resolve().parent / "fixtures" / "guide.xml"


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.tmp_path = Path(self.tmp.name)

        manager_patch = patch.object(
            config_module, "_config_manager", ConfigManager(config_dir=self.tmp_path / "config")
        )
        manager_patch.start()
        self.addCleanup(manager_patch.stop)

    def test_keywords_json(self) -> None:
        result = self.runner.invoke(app, ["keywords", str(FIXTURE), "--json"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output), ["admin", "debian", "intro", "linux", "windows"])

    def test_keywords_table(self) -> None:
        result = self.runner.invoke(app, ["keywords", str(FIXTURE)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("debian", result.output)

    def test_fold_text_output(self) -> None:
        out = self.tmp_path / "folded.xml"
        result = self.runner.invoke(app, ["fold", str(FIXTURE), "--show", "linux", "--output", str(out)])
        self.assertEqual(result.exit_code, 0, result.output)

        folded = out.read_text(encoding="utf-8")
        self.assertIn("apt install tool", folded)
        self.assertIn('<section keys="windows">...', folded)
        self.assertIn("<appendix>...", folded)
        self.assertNotIn("Run the installer.", folded)

    def test_fold_json_report(self) -> None:
        out = self.tmp_path / "report.json"
        result = self.runner.invoke(
            app, ["fold", str(FIXTURE), "-s", "intro,debian", "-f", "json", "-o", str(out)]
        )
        self.assertEqual(result.exit_code, 0, result.output)

        report = json.loads(out.read_text(encoding="utf-8"))
        self.assertEqual(report["visible_keywords"], ["debian", "intro"])
        self.assertEqual([item["tag"] for item in report["hidden"]], ["title", "para", "section", "appendix"])
        self.assertTrue(report["source_path"].endswith("guide.xml"))

    def test_fold_without_keywords_hides_everything(self) -> None:
        out = self.tmp_path / "folded.xml"
        result = self.runner.invoke(app, ["fold", str(FIXTURE), "-o", str(out)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(out.read_text(encoding="utf-8").rstrip().endswith('<guide keys="">...'))

    def test_fold_with_custom_attribute(self) -> None:
        doc = self.tmp_path / "doc.xml"
        doc.write_text('<r><a tags="x">A</a><b tags="y">B</b></r>', encoding="utf-8")
        out = self.tmp_path / "out.xml"

        result = self.runner.invoke(app, ["fold", str(doc), "-a", "tags", "-s", "x", "-o", str(out)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(out.read_text(encoding="utf-8"), '<r><a tags="x">A</a><b tags="y">...</r>')

    def test_missing_file_exits_with_error(self) -> None:
        result = self.runner.invoke(app, ["fold", str(self.tmp_path / "nope.xml"), "-s", "x"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("File not found", result.output)

    def test_malformed_document_exits_with_error(self) -> None:
        doc = self.tmp_path / "broken.xml"
        doc.write_text("<a><b></a>", encoding="utf-8")
        result = self.runner.invoke(app, ["keywords", str(doc)])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Error reading document", result.output)

    def test_open_unreadable_path_exits_with_error(self) -> None:
        result = self.runner.invoke(app, ["open", str(self.tmp_path)])
        self.assertEqual(result.exit_code, 1)
        self.assertNotIsInstance(result.exception, OSError)
        self.assertIn("Error opening document", result.output)

    def test_deeply_nested_document(self) -> None:
        doc = self.tmp_path / "deep.xml"
        doc.write_text("<a>" * 1500 + '<b keys="k"/>' + "</a>" * 1500, encoding="utf-8")

        result = self.runner.invoke(app, ["keywords", str(doc), "--json"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output), ["k"])

        out = self.tmp_path / "deep-folded.xml"
        result = self.runner.invoke(app, ["fold", str(doc), "-s", "k", "-o", str(out)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(out.read_text(encoding="utf-8"), doc.read_text(encoding="utf-8"))

    def test_unknown_format_is_rejected(self) -> None:
        result = self.runner.invoke(app, ["fold", str(FIXTURE), "-f", "yaml"])
        self.assertEqual(result.exit_code, 1)

    def test_config_set_attribute_is_saved(self) -> None:
        result = self.runner.invoke(app, ["config", "--set-attribute", "tags"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("keyword_attribute: tags", (self.tmp_path / "config" / "config.yaml").read_text())

        result = self.runner.invoke(app, ["config", "--set-attribute", "two words"])
        self.assertEqual(result.exit_code, 1)


if __name__ == "__main__":
    unittest.main(verbosity=2)
