import pytest

from packetsize.config import PacketSizeConfig, load_config


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for env in ("PACKETSIZE_CONFIG", "PACKETSIZE_LOG_LEVEL", "PACKETSIZE_MAX_PACKET_BYTES", "PACKETSIZE_MAX_VALUE_BYTES"):
        monkeypatch.delenv(env, raising=False)
    cfg = load_config()
    assert cfg == PacketSizeConfig()
    assert cfg.log_level == "INFO"
    assert cfg.max_packet_bytes == 0


def test_file_then_env(monkeypatch, tmp_path):
    p = tmp_path / "packetsize.yml"
    p.write_text("log_level: debug\nmax_packet_bytes: 900\nmax_value_bytes: 200\nunused: 1\n", encoding="utf-8")
    monkeypatch.setenv("PACKETSIZE_CONFIG", str(p))
    monkeypatch.setenv("PACKETSIZE_MAX_VALUE_BYTES", "300")
    cfg = load_config()
    assert cfg.log_level == "DEBUG"
    assert cfg.max_packet_bytes == 900
    assert cfg.max_value_bytes == 300


def test_explicit_path_must_exist(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yml"))


@pytest.mark.parametrize(
    "env,value",
    [
        ("PACKETSIZE_MAX_PACKET_BYTES", "lots"),
        ("PACKETSIZE_MAX_PACKET_BYTES", "-1"),
        ("PACKETSIZE_LOG_LEVEL", "CHATTY"),
    ],
)
def test_invalid_env(monkeypatch, env, value):
    monkeypatch.setenv(env, value)
    with pytest.raises(ValueError):
        load_config()
