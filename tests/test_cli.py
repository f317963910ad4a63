from __future__ import annotations

from pathlib import Path

import pytest

from modelserver import cli
from modelserver.config import ApiConfig, LoggingConfig, ModelServerConfig, VideoConfig


def _base(tmp_path: Path) -> ModelServerConfig:
    return ModelServerConfig(
        api=ApiConfig(host="0.0.0.0", port=8000, routing="path"),
        video=VideoConfig(enabled=True, tmp_dir=tmp_path),
        logging=LoggingConfig(level="INFO", json=False),
    )


def test_build_config_keeps_base_without_flags(tmp_path: Path) -> None:
    args = cli._build_parser().parse_args([])
    config = cli.build_config(args, base=_base(tmp_path))

    assert config.api.host == "0.0.0.0"
    assert config.api.port == 8000
    assert config.api.routing == "path"
    assert config.video.enabled is True


def test_build_config_applies_overrides(tmp_path: Path) -> None:
    args = cli._build_parser().parse_args(
        [
            "--host",
            "127.0.0.1",
            "--port",
            "9100",
            "--routing",
            "implicit",
            "--cors-origin",
            "http://localhost:3000",
            "--no-video",
            "--log-level",
            "debug",
        ]
    )
    base = _base(tmp_path)
    config = cli.build_config(args, base=base)

    assert config.api.host == "127.0.0.1"
    assert config.api.port == 9100
    assert config.api.routing == "implicit"
    assert config.api.cors_allow_origin == "http://localhost:3000"
    assert config.video.enabled is False
    assert config.logging.level == "DEBUG"
    assert base.api.port == 8000


def test_cli_runs_uvicorn_with_app(monkeypatch, tmp_path: Path) -> None:
    captured = {}

    def fake_run(app, host, port, log_level):
        captured.update(app=app, host=host, port=port, log_level=log_level)

    monkeypatch.setattr(cli.uvicorn, "run", fake_run)
    monkeypatch.setattr(cli, "CONFIG", _base(tmp_path))

    assert cli._cli(["--port", "8123", "--routing", "implicit"]) == 0
    assert captured["port"] == 8123
    assert captured["host"] == "0.0.0.0"
    assert captured["log_level"] == "info"
    assert captured["app"].state.config.api.routing == "implicit"


def test_unknown_log_level_is_rejected() -> None:
    with pytest.raises(SystemExit):
        cli._build_parser().parse_args(["--log-level", "verbose"])


def test_log_level_is_case_insensitive() -> None:
    args = cli._build_parser().parse_args(["--log-level", "WARNING"])
    assert args.log_level == "warning"


def test_unknown_configured_level_falls_back_to_info(monkeypatch, tmp_path: Path) -> None:
    captured = {}
    base = _base(tmp_path)
    base.logging.level = "VERBOSE"

    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: captured.update(kwargs))
    monkeypatch.setattr(cli, "CONFIG", base)

    assert cli._cli([]) == 0
    assert captured["log_level"] == "info"
