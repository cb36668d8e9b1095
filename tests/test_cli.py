import json
import re
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from typer.testing import CliRunner

from notegraph.cli import app


def _write(root: Path, rel: str, text: str = "") -> None:
    p = root / rel
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")


class TestCli(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name) / "vault"
        _write(self.root, "Index.md", "- [[Topic1]] ✅\n- [[Topic2]] ⏳\n")
        _write(self.root, "Topic1.md", "no links here")
        _write(self.root, "Topic2.md", "[[Topic1]] [[Missing]]")
        self.runner = CliRunner()

    def tearDown(self):
        self._tmp.cleanup()

    def test_report_json(self):
        res = self.runner.invoke(app, ["report", str(self.root), "--root", "Index"])
        self.assertEqual(res.exit_code, 0, res.output)
        data = json.loads(res.stdout)
        self.assertEqual(data["totalNotes"], 3)
        self.assertEqual(data["totalEdges"], 3)
        self.assertEqual(data["danglingLinks"], [{"fromTitle": "Topic2", "toTitle": "Missing"}])
        self.assertEqual(data["orphanNotes"], [])

    def test_report_is_idempotent(self):
        a = self.runner.invoke(app, ["report", str(self.root), "-r", "Index"])
        b = self.runner.invoke(app, ["report", str(self.root), "-r", "Index", "--workers", "3"])
        self.assertEqual(a.stdout, b.stdout)

    def test_report_to_file(self):
        out = Path(self._tmp.name) / "out" / "report.json"
        res = self.runner.invoke(app, ["report", str(self.root), "--output", str(out)])
        self.assertEqual(res.exit_code, 0, res.output)
        data = json.loads(out.read_text(encoding="utf-8"))
        self.assertEqual(data["orphanNotes"], ["Index"])

    def test_report_table(self):
        res = self.runner.invoke(app, ["report", str(self.root), "--format", "table"])
        self.assertEqual(res.exit_code, 0, res.output)
        self.assertIn("Dangling Links", res.stdout)

    def test_bad_format(self):
        res = self.runner.invoke(app, ["report", str(self.root), "--format", "xml"])
        self.assertNotEqual(res.exit_code, 0)

    def test_fail_on_dangling(self):
        res = self.runner.invoke(app, ["report", str(self.root), "--fail-on-dangling"])
        self.assertEqual(res.exit_code, 1)
        _write(self.root, "Missing.md", "")
        res = self.runner.invoke(app, ["report", str(self.root), "--fail-on-dangling"])
        self.assertEqual(res.exit_code, 0, res.output)

    def test_duplicate_titles_exit_2(self):
        _write(self.root, "sub/Topic1.md", "")
        res = self.runner.invoke(app, ["report", str(self.root)])
        self.assertEqual(res.exit_code, 2)
        self.assertIn("Topic1.md", res.output)
        self.assertIn("sub/Topic1.md", res.output)

    def test_read_error_exit_1(self):
        err = PermissionError(13, "Permission denied", "Topic1.md")
        with mock.patch("notegraph.ingest.files._read", side_effect=err):
            res = self.runner.invoke(app, ["report", str(self.root)])
        self.assertEqual(res.exit_code, 1)
        self.assertIn("Could not read vault", res.output)
        self.assertIn("Permission denied", res.output)

    def test_stats_matches_report(self):
        rep = json.loads(self.runner.invoke(app, ["report", str(self.root), "-r", "Index"]).stdout)
        res = self.runner.invoke(app, ["stats", str(self.root), "-r", "Index"])
        self.assertEqual(res.exit_code, 0, res.output)
        rows = {}
        for line in res.stdout.splitlines():
            cells = [c.strip() for c in re.split(r"[│|]", line.strip("│┃| "))]
            if len(cells) == 2:
                rows[cells[0]] = cells[1]
        self.assertEqual(rows["Edges"], str(rep["totalEdges"]))
        self.assertEqual(rows["Dangling links"], str(len(rep["danglingLinks"])))
        self.assertEqual(rows["Orphan notes"], str(len(rep["orphanNotes"])))

    def test_hash_title_links(self):
        _write(self.root, "C# vs JavaScript.md", "")
        _write(self.root, "Topic1.md", "[[C# vs JavaScript]]")
        res = self.runner.invoke(app, ["report", str(self.root), "-r", "Index"])
        data = json.loads(res.stdout)
        self.assertNotIn({"fromTitle": "Topic1", "toTitle": "C"}, data["danglingLinks"])
        self.assertNotIn("C# vs JavaScript", data["orphanNotes"])

    def test_missing_vault_dir(self):
        res = self.runner.invoke(app, ["report", str(self.root / "nope")])
        self.assertNotEqual(res.exit_code, 0)

    def test_links(self):
        res = self.runner.invoke(app, ["links", str(self.root), "Topic2"])
        self.assertEqual(res.exit_code, 0, res.output)
        self.assertIn("Missing (missing)", res.stdout)
        self.assertIn("- Index", res.stdout)

    def test_links_unknown_note(self):
        res = self.runner.invoke(app, ["links", str(self.root), "Nope"])
        self.assertEqual(res.exit_code, 2)

    def test_stats(self):
        res = self.runner.invoke(app, ["stats", str(self.root)])
        self.assertEqual(res.exit_code, 0, res.output)
        self.assertIn("Most Linked Notes", res.stdout)
        self.assertIn("Topic1", res.stdout)


if __name__ == "__main__":
    unittest.main()
