"""Pytest configuration and fixtures for trident-connect tests."""

import os
import stat
from collections.abc import Callable
from pathlib import Path

import pytest
import structlog

from trident_connect.config.session import POD_SERVER, ResolvedConnection, SessionConfig, TridentSession
from trident_connect.types import OperatingMode


@pytest.fixture(autouse=True)
def reset_logging():
    """Start and finish every test on structlog's own defaults, unfiltered."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


@pytest.fixture
def fake_bin(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[[str, str], Path]:
    """Install shell scripts standing in for oc/kubectl at the front of PATH.

    Usage: ``fake_bin("kubectl", "echo '{}'\\nexit 0")``
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")

    def _install(name: str, body: str) -> Path:
        script = bin_dir / name
        script.write_text(f"#!/bin/sh\n{body}\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _install


@pytest.fixture
def tunnel_session() -> Callable[..., TridentSession]:
    """Build a session already resolved to tunnel mode."""

    def _build(debug: bool = False, output_format: str | None = None, cli: str = "kubectl") -> TridentSession:
        config = SessionConfig(debug=debug, output_format=output_format)
        connection = ResolvedConnection(
            mode=OperatingMode.TUNNEL,
            server=POD_SERVER,
            namespace="trident",
            pod_name="trident-7d8f9c6b5-x2x7q",
            cli=cli,
            debug=debug,
        )
        return TridentSession(config, connection)

    return _build
