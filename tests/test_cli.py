"""Tests for the formcheck command."""

import json

import pytest
import structlog

from formcheck import __version__
from formcheck.cli import EXIT_CONFIG, EXIT_INVALID, EXIT_OK, main, render


@pytest.fixture
def rules_file(tmp_path, signup_yaml):
    path = tmp_path / "signup.yaml"
    path.write_text(signup_yaml, encoding="utf-8")
    return str(path)


@pytest.fixture
def write_record(tmp_path):
    def _write(record, name="record.json"):
        path = tmp_path / name
        path.write_text(json.dumps(record), encoding="utf-8")
        return str(path)
    return _write


class TestMain:
    def test_invalid_record(self, capsys, rules_file, write_record):
        record = write_record({"id": "100", "name": "", "age": "15"})
        assert main([rules_file, record]) == EXIT_INVALID
        out = capsys.readouterr().out.splitlines()
        assert out == [
            "id: Please enter a valid ID.",
            "name: Please enter a name.",
            "age: You must be 16 or older.",
        ]

    def test_valid_record(self, capsys, rules_file, write_record):
        record = write_record({"id": "1000", "name": "Jane", "age": "16"})
        assert main([rules_file, record]) == EXIT_OK
        assert capsys.readouterr().out.strip() == "All fields valid."

    def test_json_output(self, capsys, rules_file, write_record):
        record = write_record({"id": "1000", "name": "", "age": "16"})
        assert main([rules_file, record, "--format", "json"]) == EXIT_INVALID
        assert json.loads(capsys.readouterr().out) == {"name": "Please enter a name."}

    def test_yaml_record(self, capsys, tmp_path, rules_file):
        record = tmp_path / "record.yaml"
        record.write_text("id: '1000'\nname: Jane\nage: 40\n", encoding="utf-8")
        assert main([rules_file, str(record)]) == EXIT_OK

    def test_json_logs(self, capsys, rules_file, write_record):
        record = write_record({"id": "1000", "name": "Jane", "age": "16"})
        assert main([rules_file, record, "--json-logs", "--log-level", "INFO"]) == EXIT_OK
        captured = capsys.readouterr()
        assert captured.out.strip() == "All fields valid."
        assert "record_checked" in captured.err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestConfigurationFailures:
    def test_unknown_rule(self, capsys, tmp_path, write_record):
        rules = tmp_path / "bad.yaml"
        rules.write_text("fields:\n  - field: a\n    rules:\n      - {rule: 'minimum||3', message: x}\n")
        assert main([str(rules), write_record({"a": "x"})]) == EXIT_CONFIG
        err = capsys.readouterr().err
        assert "formcheck: Invalid validation rule 'minimum'" in err

    def test_missing_rules_file(self, capsys, tmp_path, write_record):
        assert main([str(tmp_path / "nope.yaml"), write_record({})]) == EXIT_CONFIG
        assert "formcheck: File not found" in capsys.readouterr().err

    def test_record_not_a_mapping(self, capsys, tmp_path, rules_file):
        record = tmp_path / "record.json"
        record.write_text('["1000", "Jane"]', encoding="utf-8")
        assert main([rules_file, str(record)]) == EXIT_CONFIG
        assert "record must be a mapping" in capsys.readouterr().err

    def test_record_missing_field(self, capsys, rules_file, write_record):
        assert main([rules_file, write_record({"id": "1000"})]) == EXIT_CONFIG
        assert "Field 'name' is missing" in capsys.readouterr().err

    def test_json_error_payload(self, capsys, tmp_path, write_record):
        assert main([str(tmp_path / "nope.yaml"), write_record({}), "--format", "json"]) == EXIT_CONFIG
        payload = json.loads(capsys.readouterr().err.strip().splitlines()[-1])["error"]
        assert payload["code"] == "E6001_FILE_NOT_FOUND"
        assert payload["category"] == "resource"

    def test_run_context_is_cleared(self, capsys, rules_file, write_record):
        main([rules_file, write_record({"id": "1000", "name": "Jane", "age": "16"})])
        assert structlog.contextvars.get_contextvars() == {}

    def test_run_context_in_logs(self, capsys, rules_file, write_record):
        record = write_record({"id": "1000", "name": "Jane", "age": "16"})
        main([rules_file, record, "--json-logs"])
        events = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line.startswith("{")]
        checked = next(e for e in events if e["event"] == "record_checked")
        assert checked["rules"] == rules_file
        assert checked["record"] == record


class TestRender:
    def test_text(self):
        assert render({0: "a", "name": "b"}, "text") == "0: a\nname: b"

    def test_empty_text(self):
        assert render({}, "text") == "All fields valid."

    def test_json_keys_are_strings(self):
        assert json.loads(render({0: "a"}, "json")) == {"0": "a"}
