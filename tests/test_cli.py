import io
import json
import logging

from packetsize.cli import main


def _write(tmp_path, text, name="packet.yml"):
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return str(p)


def test_estimate_prints_measurement(tmp_path, capsys):
    path = _write(tmp_path, "values:\n  - true\n  - hello\n")
    rc = main(["estimate", "--input", path])
    out = json.loads(capsys.readouterr().out)
    assert rc == 0
    assert out["total_bytes"] == 19
    assert out["value_bytes"] == [2, 8]
    assert out["over_limits"] is False


def test_skip_flag(tmp_path, capsys):
    path = _write(tmp_path, "[true]")
    rc = main(["estimate", "--input", path, "--skip-transport-overhead"])
    assert rc == 0
    assert json.loads(capsys.readouterr().out)["total_bytes"] == 2


def test_over_budget_exit_status(tmp_path, capsys):
    path = _write(tmp_path, "values:\n  - true\n  - hello\n")
    rc = main(["estimate", "--input", path, "--max-bytes", "10"])
    assert rc == 1
    assert json.loads(capsys.readouterr().out)["over_limits"] is True


def test_budget_from_env(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("PACKETSIZE_MAX_VALUE_BYTES", "4")
    path = _write(tmp_path, "values:\n  - hello\n")
    assert main(["estimate", "--input", path]) == 1
    # command line wins over configuration
    assert main(["estimate", "--input", path, "--max-value-bytes", "0"]) == 0


def test_stdin_input(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("[{Vector3: [0, 0, 0]}]"))
    assert main(["estimate", "--input", "-"]) == 0
    assert json.loads(capsys.readouterr().out)["total_bytes"] == 9 + 13


def test_bad_document(tmp_path, capsys):
    path = _write(tmp_path, "values:\n  - {Vector3: [1]}\n")
    assert main(["estimate", "--input", path]) == 2
    assert "Vector3" in capsys.readouterr().err


def test_missing_input_file(tmp_path, capsys):
    assert main(["estimate", "--input", str(tmp_path / "nope.yml")]) == 2
    assert "error" in capsys.readouterr().err


def test_log_level_from_config(tmp_path, capsys, monkeypatch):
    logger = logging.getLogger("packetsize")
    old = logger.level
    monkeypatch.setenv("PACKETSIZE_LOG_LEVEL", "error")
    path = _write(tmp_path, "[true]")
    try:
        assert main(["estimate", "--input", path]) == 0
        assert logger.level == logging.ERROR
    finally:
        logger.setLevel(old)


def test_table_command(capsys):
    assert main(["table"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["transport_overhead"] == 9
    assert out["type_overhead"] == 1
    assert out["type_sizes"]["Vector3"] == 12
