"""Tests for the configuration check script."""

from __future__ import annotations

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from pathlib import Path

import pytest

from scripts import check_env

CONSOLE_ENV_KEYS = [
    "APP_LOG_LEVEL",
    "CONSOLE_DB_PATH",
    "CONSOLE_PROXY_TIMEOUT",
    "CONSOLE_TOKEN_TIMEOUT",
    "CONSOLE_DEFAULT_TOKEN_TTL",
]


def _write_env(env_path: Path, **values: str) -> None:
    contents = "\n".join(f"{key}={value}" for key, value in values.items())
    env_path.write_text(contents + "\n", encoding="utf-8")


def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # setenv first so monkeypatch restores keys the script loads from the file.
    for key in CONSOLE_ENV_KEYS:
        monkeypatch.setenv(key, "placeholder")
        monkeypatch.delenv(key)


@pytest.mark.parametrize("command", ["record", "verify", "check", "show"])
def test_main_requires_existing_env_file(tmp_path: Path, command: str) -> None:
    env_file = tmp_path / ".missing-env"
    argv = [command, "--env-file", str(env_file)]
    if command in {"record", "verify"}:
        argv.extend(["--hash-file", str(tmp_path / ".env.sha256")])

    assert check_env.main(argv) == check_env.EXIT_RUNTIME_ERROR


def test_record_and_verify_detects_changed_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    env_file = tmp_path / ".env"
    hash_file = tmp_path / ".env.sha256"
    argv = ["--env-file", str(env_file), "--hash-file", str(hash_file)]

    _isolate_env(monkeypatch)
    _write_env(env_file, APP_LOG_LEVEL="debug", CONSOLE_PROXY_TIMEOUT="15")
    assert check_env.main(["record", *argv]) == check_env.EXIT_OK
    assert hash_file.read_text(encoding="utf-8").strip()

    _isolate_env(monkeypatch)
    assert check_env.main(["verify", *argv]) == check_env.EXIT_OK

    _isolate_env(monkeypatch)
    _write_env(env_file, APP_LOG_LEVEL="debug", CONSOLE_PROXY_TIMEOUT="45")
    assert check_env.main(["verify", *argv]) == check_env.EXIT_CHECKSUM_ERROR


def test_verify_without_baseline_is_runtime_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    env_file = tmp_path / ".env"
    _isolate_env(monkeypatch)
    _write_env(env_file, APP_LOG_LEVEL="INFO")

    exit_code = check_env.main(
        ["verify", "--env-file", str(env_file), "--hash-file", str(tmp_path / "none")]
    )
    assert exit_code == check_env.EXIT_RUNTIME_ERROR


@pytest.mark.parametrize(
    "values",
    [
        {"CONSOLE_PROXY_TIMEOUT": "-5"},
        {"CONSOLE_DEFAULT_TOKEN_TTL": "0"},
        {"APP_LOG_LEVEL": "chatty"},
    ],
)
def test_invalid_values_fail_validation(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, values: dict[str, str]
) -> None:
    env_file = tmp_path / ".env"
    _isolate_env(monkeypatch)
    _write_env(env_file, **values)

    assert check_env.main(["check", "--env-file", str(env_file)]) == (
        check_env.EXIT_VALIDATION_ERROR
    )


def test_show_prints_effective_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    env_file = tmp_path / ".env"
    _isolate_env(monkeypatch)
    _write_env(env_file, CONSOLE_DB_PATH="/var/lib/console.db", CONSOLE_TOKEN_TIMEOUT="4")

    assert check_env.main(["show", "--env-file", str(env_file)]) == check_env.EXIT_OK

    output = capsys.readouterr().out
    assert "/var/lib/console.db" in output
    assert "token timeout:      4.0" in output
