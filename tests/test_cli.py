from __future__ import annotations

import io

import pytest

from circuitbreakers import BreakerConfig, CircuitBreaker, ManualClock, __version__
from circuitbreakers.cli import main, parse_args, run_session


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CB_CAPACITY", raising=False)
    monkeypatch.delenv("CB_MIN_EVAL_SIZE", raising=False)


def test_parse_args_long_flags() -> None:
    cfg = parse_args(
        [
            "--buffer-size", "42",
            "--min-eval-size", "11",
            "--error-threshold", "10.78",
            "--retry-timeout", "200",
            "--buffer-span-duration", "550",
            "--trial-success-required", "666",
        ]
    )
    assert cfg == BreakerConfig(
        capacity=42,
        min_eval_size=11,
        error_threshold=10.78,
        retry_timeout_sec=200.0,
        span_sec=550.0,
        trial_success_required=666,
    )


def test_parse_args_short_flags() -> None:
    cfg = parse_args(["-b", "0", "-m", "875", "-e", "5647.1", "-r", "62", "-s", "279", "-t", "0"])
    assert cfg == BreakerConfig(
        capacity=0,
        min_eval_size=875,
        error_threshold=5647.1,
        retry_timeout_sec=62.0,
        span_sec=279.0,
        trial_success_required=0,
    )


def test_parse_args_underscore_spelling() -> None:
    assert parse_args(["--min_eval_size", "10"]) == BreakerConfig(min_eval_size=10)


def test_parse_args_defaults() -> None:
    assert parse_args([]) == BreakerConfig()


@pytest.mark.parametrize(
    "argv",
    [
        ["-b", "-9"],
        ["-b"],
        ["-m", "lots"],
        ["-r", "-1"],
        ["-t", "1.5"],
        ["--unknown"],
    ],
)
def test_parse_args_rejects_bad_input(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        parse_args(argv)
    assert exc.value.code == 2


def test_parse_args_flags_override_config_file(tmp_path) -> None:
    path = tmp_path / "breaker.yml"
    path.write_text("capacity: 9\nmin_eval_size: 3\n", encoding="utf-8")
    cfg = parse_args(["--config", str(path), "-b", "4"])
    assert cfg.capacity == 4
    assert cfg.min_eval_size == 3


def test_version(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert capsys.readouterr().out.strip() == f"v{__version__}"


def test_help_lists_every_setting(capsys) -> None:
    with pytest.raises(SystemExit):
        main(["--help"])
    out = capsys.readouterr().out
    for flag in (
        "--buffer-size",
        "--buffer-span-duration",
        "--min-eval-size",
        "--error-threshold",
        "--retry-timeout",
        "--trial-success-required",
    ):
        assert flag in out


def test_main_missing_config(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--config", str(tmp_path / "missing.yml")])
    assert exc.value.code == 1
    assert "Config file not found" in capsys.readouterr().err


def test_main_rejects_empty_window(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["-b", "0"])
    assert exc.value.code == 1
    assert "Invalid settings" in capsys.readouterr().err


def test_main_runs_session_from_stdin(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("s\nf\nq\n"))
    main(["-a", "-b", "3", "-s", "60"])
    out = capsys.readouterr().out
    assert out.count("Status: Closed") == 3
    assert "Success" in out
    assert "Failure" in out


def test_run_session_records_outcomes() -> None:
    clock = ManualClock()
    breaker = CircuitBreaker(BreakerConfig(capacity=3, span_sec=1.0), clock=clock)
    out = io.StringIO()

    run_session(breaker, ["s", "S", "f", "", "q", "f"], out, color=False)

    info = breaker.inspect_bucket(0)
    assert info.success_count == 2
    assert info.failure_count == 1
    text = out.getvalue()
    assert "\x1b[" not in text
    # initial view plus one per command before quitting
    assert text.count("Status: Closed") == 5


def test_run_session_ignores_unknown_commands(caplog) -> None:
    breaker = CircuitBreaker(BreakerConfig(capacity=2, span_sec=1.0), clock=ManualClock())
    out = io.StringIO()
    run_session(breaker, ["x"], out, color=False)
    assert breaker.inspect_bucket(0).total == 0
    assert "Ignoring unknown command" in caplog.text


def test_run_session_clears_screen() -> None:
    breaker = CircuitBreaker(BreakerConfig(capacity=2, span_sec=1.0), clock=ManualClock())
    out = io.StringIO()
    run_session(breaker, [], out, color=False, clear=True)
    assert out.getvalue().startswith("\x1b[2J\x1b[H")
