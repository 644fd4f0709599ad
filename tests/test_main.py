"""Tests for the mccmnc CLI entry point."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from mccmnc.__main__ import main
from mccmnc.errors import FetchError, NotFoundError
from mccmnc.items import DocumentReference, Entry, ExtractionResult
from mccmnc.output import assemble


def _document():
    result = ExtractionResult(
        areas={"canada": [Entry(name="Bell", mcc="302", mnc="610")]},
        area_names=["Canada"],
    )
    return assemble(result, DocumentReference(url="https://www.itu.int/x.docx", etag="e"))


class TestMain:
    def test_help_exits_zero_without_running(self, capsys):
        with patch("mccmnc.__main__.run") as mock_run, pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0
        mock_run.assert_not_called()
        assert "--output" in capsys.readouterr().out

    def test_short_help(self):
        with patch("mccmnc.__main__.run"), pytest.raises(SystemExit) as exc_info:
            main(["-h"])
        assert exc_info.value.code == 0

    def test_success_writes_output(self, tmp_path):
        out = tmp_path / "data.json"
        with patch("mccmnc.__main__.run", return_value=_document()):
            assert main(["-o", str(out)]) == 0
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["areaNames"] == ["Canada"]
        assert data["metadata"]["etag"] == "e"

    def test_default_output_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MCCMNC_OUTPUT", str(tmp_path / "env.json"))
        with patch("mccmnc.__main__.run", return_value=_document()):
            assert main([]) == 0
        assert (tmp_path / "env.json").exists()

    def test_unknown_arguments_ignored(self, tmp_path):
        out = tmp_path / "data.json"
        with patch("mccmnc.__main__.run", return_value=_document()):
            assert main(["--output", str(out), "--frobnicate", "extra"]) == 0
        assert out.exists()

    def test_failure_exits_nonzero_and_reports(self, tmp_path, capsys):
        out = tmp_path / "data.json"
        err = NotFoundError("Could not find DOCX download link")
        with patch("mccmnc.__main__.run", side_effect=err):
            assert main(["--output", str(out)]) == 1
        assert "Could not find DOCX download link" in capsys.readouterr().err
        assert not out.exists()

    def test_failure_leaves_previous_output(self, tmp_path):
        out = tmp_path / "data.json"
        out.write_text('{"previous": true}', encoding="utf-8")
        with patch("mccmnc.__main__.run", side_effect=FetchError("HTTP 503", status=503)):
            assert main(["--output", str(out)]) == 1
        assert json.loads(out.read_text(encoding="utf-8")) == {"previous": True}

    def test_bad_config_file(self, tmp_path):
        with patch("mccmnc.__main__.run") as mock_run:
            assert main(["--config", str(tmp_path / "missing.yaml")]) == 1
        mock_run.assert_not_called()

    def test_output_flag_without_value_uses_default(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MCCMNC_OUTPUT", str(tmp_path / "default.json"))
        with patch("mccmnc.__main__.run", return_value=_document()):
            assert main(["-o"]) == 0
        assert (tmp_path / "default.json").exists()

    def test_unknown_log_level_falls_back(self, tmp_path):
        out = tmp_path / "data.json"
        with patch("mccmnc.__main__.run", return_value=_document()):
            assert main(["--log-level", "bogus", "-o", str(out)]) == 0
        assert out.exists()

    def test_log_level_case_insensitive(self, tmp_path):
        out = tmp_path / "data.json"
        with patch("mccmnc.__main__.run", return_value=_document()):
            assert main(["--log-level", "debug", "-o", str(out)]) == 0
        assert out.exists()
