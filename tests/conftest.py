"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from umbrella.core.config.loader import ENV_VARS


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's shell settings out of every test."""
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)
    for var in ("UMBRELLA_LOG_LEVEL", "UMBRELLA_LOG_FILE", "UMBRELLA_LOG_FILE_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def includes_dir(tmp_path: Path) -> Path:
    """Return an includes root holding openssl/a.h and openssl/b.h."""
    root = tmp_path / "include"
    ns = root / "openssl"
    ns.mkdir(parents=True)
    (ns / "a.h").write_text("/* a */\n")
    (ns / "b.h").write_text("/* b */\n")
    return root


@pytest.fixture
def static_includes(tmp_path: Path) -> Path:
    """Return a static include list matching ``includes_dir``, b before a."""
    path = tmp_path / "umbrella_static_includes.txt"
    path.write_text("#import <openssl/b.h>\n#import <openssl/a.h>\n")
    return path


@pytest.fixture
def header_template(tmp_path: Path) -> Path:
    path = tmp_path / "OpenSSL.h.in"
    path.write_text("Generated @DATE@ (@YEAR@)\n@GENERATED_CONTENT@\n")
    return path


@pytest.fixture
def header_dest(tmp_path: Path) -> Path:
    return tmp_path / "out" / "OpenSSL.h"
