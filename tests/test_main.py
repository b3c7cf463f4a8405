# tests/test_main.py
"""
End-to-end tests for the annotation-refcheck command line.
"""

import json

import pytest

from annotation_refcheck import __version__
from annotation_refcheck.main import EXIT_ERROR, EXIT_INFRA, EXIT_OK, main


class TestCheckCommand:

    def test_reports_and_fails(self, dump_file, capsys):
        rc = main(["check", str(dump_file)])
        out = capsys.readouterr().out.splitlines()
        assert rc == EXIT_ERROR
        assert len(out) == 2
        assert out[0].startswith("src/Controller/UserController.php:12: error:")
        assert out[0].endswith("[AnnotationNotImported]")
        assert "[ConstReferenceConstNotFound]" in out[1]

    def test_json_output(self, dump_file, capsys):
        main(["check", str(dump_file), "-f", "json"])
        records = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert [r["errorId"] for r in records] == [
            "AnnotationNotImported",
            "ConstReferenceConstNotFound",
        ]
        assert records[1]["args"] == ["SOME_CONST", "Qux::SOME_CONST", "Qux"]

    def test_summary_output(self, dump_file, capsys):
        main(["check", str(dump_file), "-f", "summary"])
        out = capsys.readouterr().out
        assert "Checker run complete: 2 diagnostics (2 errors, 0 warnings)" in out

    def test_exception_and_suppress_flags(self, dump_file, capsys):
        rc = main([
            "check", str(dump_file),
            "--exception", "Route",
            "--suppress", "ConstReferenceConstNotFound",
        ])
        assert rc == EXIT_OK
        assert capsys.readouterr().out == ""

    def test_config_file(self, dump_file, tmp_path, capsys):
        config = tmp_path / "refcheck.json"
        config.write_text(json.dumps({
            "exceptions": ["Route"],
            "severity": {"ConstReferenceConstNotFound": "warning"},
            "format": "json",
        }), encoding="utf-8")
        rc = main(["check", str(dump_file), "-c", str(config)])
        records = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert rc == EXIT_OK
        assert [r["severity"] for r in records] == ["warning"]

    def test_output_file(self, dump_file, tmp_path, capsys):
        target = tmp_path / "out" / "report.txt"
        main(["check", str(dump_file), "-o", str(target)])
        assert capsys.readouterr().out == ""
        assert len(target.read_text(encoding="utf-8").splitlines()) == 2

    def test_missing_dump(self, tmp_path):
        assert main(["check", str(tmp_path / "missing.json")]) == EXIT_INFRA

    def test_bad_dump(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text('{"classes": 1}', encoding="utf-8")
        assert main(["check", str(path)]) == EXIT_INFRA
        assert "must be a list" in capsys.readouterr().err

    def test_bad_config(self, dump_file, tmp_path):
        config = tmp_path / "refcheck.json"
        config.write_text('{"colour": "red"}', encoding="utf-8")
        assert main(["check", str(dump_file), "-c", str(config)]) == EXIT_INFRA


class TestOtherCommands:

    def test_list_checkers(self, capsys):
        assert main(["list-checkers"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "annotation" in out
        assert "doctrine-annotation" in out
        assert "(disabled by default)" in out

    def test_no_command(self, capsys):
        assert main([]) == EXIT_INFRA
        assert "usage:" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert __version__ in capsys.readouterr().out
