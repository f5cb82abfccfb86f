"""Tests for the Autosum pipeline and CLI.

These tests use hand-built document trees written to JSON files in
``tmp_path``, so the whole load → total → annotate path is exercised.
"""

import json

import pytest
from click.testing import CliRunner

from autosum.cli import main
from autosum.config import Config
from autosum.exceptions import DocumentLoadError
from autosum.pipeline import Autosum
from autosum.tree.builders import bullet_list, check_item, check_list, doc, list_item


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _simple_doc():
    return doc(bullet_list("100", "200"))


def _write_doc(tmp_path, tree=None, name="notes.json"):
    path = tmp_path / name
    path.write_text((tree or _simple_doc()).to_json(), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Pipeline tests
# ---------------------------------------------------------------------------

class TestAutosumAnnotate:
    def test_annotate(self):
        annotations = Autosum().annotate(_simple_doc())
        assert [(a.position, a.text) for a in annotations] == [(16, "Auto total: 300")]

    def test_disabled_returns_nothing(self):
        autosum = Autosum(Config(enabled=False))
        assert autosum.annotate(_simple_doc()) == []

    def test_unchanged_document_reuses_result(self, caplog):
        autosum = Autosum()
        first = autosum.annotate(_simple_doc())
        with caplog.at_level("INFO", logger="autosum.pipeline"):
            second = autosum.annotate(_simple_doc())
        assert first == second
        assert "reusing" in caplog.text

    def test_in_place_edit_is_recomputed(self):
        autosum = Autosum()
        tree = _simple_doc()
        autosum.annotate(tree)
        tree.content[0].content.append(list_item("300"))
        (annotation,) = autosum.annotate(tree)
        assert annotation.text == "Auto total: 600"

    def test_config_labels_and_matching_are_used(self):
        cfg = Config.from_yaml_string("labels:\n  total: 'Sum '\nmatching:\n  list_types: [ordered_list]\n")
        autosum = Autosum(cfg)
        assert autosum.annotate(_simple_doc()) == []
        assert autosum.totals(doc(bullet_list("1", "2"))) == []


class TestAutosumLoad:
    def test_load_round_trip(self, tmp_path):
        path = _write_doc(tmp_path)
        assert Autosum().load(path) == _simple_doc()

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentLoadError, match="not found"):
            Autosum().load(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(DocumentLoadError, match="Invalid document"):
            Autosum().load(path)

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"type": "doc", "content": [{"type": "text", "text": "\xff"}]}')
        with pytest.raises(DocumentLoadError, match="not valid UTF-8"):
            Autosum().load(path)

    def test_invalid_tree(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"content": []}))
        with pytest.raises(DocumentLoadError):
            Autosum().load(path)


class TestAutosumRun:
    def test_run_builds_report(self, tmp_path):
        tree = doc(bullet_list("1k", "2k"), check_list(check_item(True, "5"), check_item(False, "6")))
        path = _write_doc(tmp_path, tree)
        autosum = Autosum()
        report = autosum.run(path)
        assert autosum.last_report is report
        assert report.source_file == str(path)
        assert report.list_count == 2
        assert [t.formatted for t in report.totals] == ["3k", "11. Checked: 5. Unchecked: 6"]
        assert report.total_time_seconds >= 0


# ---------------------------------------------------------------------------
# CLI tests
# ---------------------------------------------------------------------------

class TestCLI:
    def test_cli_totals(self, tmp_path):
        path = _write_doc(tmp_path)
        runner = CliRunner()
        result = runner.invoke(main, ["totals", str(path)])
        assert result.exit_code == 0
        assert result.output.strip() == "16: 300"

    def test_cli_totals_json(self, tmp_path):
        path = _write_doc(tmp_path, doc(bullet_list("500k", "1.5m", "2tr")))
        runner = CliRunner()
        result = runner.invoke(main, ["totals", str(path), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0]["total"] == 4_000_000
        assert data[0]["display_unit"] == "k"

    def test_cli_annotate(self, tmp_path):
        path = _write_doc(tmp_path)
        runner = CliRunner()
        result = runner.invoke(main, ["annotate", str(path)])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0]["key"] == "autosum-16"
        assert data[0]["text"] == "Auto total: 300"

    def test_cli_parse(self):
        runner = CliRunner()
        result = runner.invoke(main, ["parse", "Budget $2.5k"])
        assert result.exit_code == 0
        assert result.output.strip() == "value=2,500 unit=k matched='$2.5k'"

    def test_cli_parse_no_value(self):
        runner = CliRunner()
        result = runner.invoke(main, ["parse", "v1.2.3 released"])
        assert result.exit_code == 1
        assert "no value" in result.output

    def test_cli_report_saves_file(self, tmp_path):
        path = _write_doc(tmp_path)
        out = tmp_path / "report.json"
        runner = CliRunner()
        result = runner.invoke(main, ["report", str(path), "--output", str(out)])
        assert result.exit_code == 0
        assert "1 lists, 1 totals" in result.output
        data = json.loads(out.read_text())
        assert data["totals"][0]["total"] == "300"

    def test_cli_invalid_document(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[]")
        runner = CliRunner()
        result = runner.invoke(main, ["totals", str(path)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_cli_non_utf8_document(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_bytes(b"\xff\xfe")
        runner = CliRunner()
        result = runner.invoke(main, ["annotate", str(path)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_cli_config_disables(self, tmp_path):
        path = _write_doc(tmp_path)
        config_file = tmp_path / "autosum.yaml"
        config_file.write_text("enabled: false\n")
        runner = CliRunner()
        result = runner.invoke(main, ["--config", str(config_file), "totals", str(path)])
        assert result.exit_code == 0
        assert result.output == ""

    def test_cli_missing_document(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["totals", str(tmp_path / "nope.json")])
        assert result.exit_code != 0

    def test_cli_verbose(self):
        runner = CliRunner()
        result = runner.invoke(main, ["-v", "--help"])
        assert result.exit_code == 0
