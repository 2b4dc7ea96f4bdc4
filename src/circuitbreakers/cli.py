from __future__ import annotations

import argparse
import logging
import select
import sys
from dataclasses import replace
from typing import Iterable, Iterator, Sequence, TextIO

from circuitbreakers import __version__
from circuitbreakers.breaker import CircuitBreaker
from circuitbreakers.config import BreakerConfig, load_config
from circuitbreakers.render import render

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\x1b[2J\x1b[H"

HELP_EPILOG = """\
Interactive commands (one per line):
  s      record a success
  f      record a failure
  <enter> refresh the view
  q      quit
"""

# flag dest -> BreakerConfig field
_FLAG_FIELDS = {
    "buffer_size": "capacity",
    "buffer_span_duration": "span_sec",
    "min_eval_size": "min_eval_size",
    "error_threshold": "error_threshold",
    "retry_timeout": "retry_timeout_sec",
    "trial_success_required": "trial_success_required",
}


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        msg = f"expected a whole number, got {value!r}"
        raise argparse.ArgumentTypeError(msg) from None
    if number < 0:
        msg = f"expected a non-negative number, got {value!r}"
        raise argparse.ArgumentTypeError(msg)
    return number


def _non_negative_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        msg = f"expected a number, got {value!r}"
        raise argparse.ArgumentTypeError(msg) from None
    if number < 0:
        msg = f"expected a non-negative number, got {value!r}"
        raise argparse.ArgumentTypeError(msg)
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="circuitbreakers",
        description="Circuit breaker visualisation and testing tool",
        epilog=HELP_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-b", "--buffer-size", "--buffer_size",
        dest="buffer_size", type=_non_negative_int, metavar="SIZE",
        help="Specify the capacity of the ring buffer.",
    )
    parser.add_argument(
        "-m", "--min-eval-size", "--min_eval_size",
        dest="min_eval_size", type=_non_negative_int, metavar="NUMBER",
        help="Define the minimum number of events required in the buffer to evaluate the error rate.",
    )
    parser.add_argument(
        "-e", "--error-threshold", "--error_threshold",
        dest="error_threshold", type=float, metavar="FLOAT",
        help="Set the error rate percentage that will trigger the circuit to open.",
    )
    parser.add_argument(
        "-r", "--retry-timeout", "--retry_timeout",
        dest="retry_timeout", type=_non_negative_float, metavar="SECONDS",
        help="Specify the duration the circuit breaker remains open before transitioning to half-open.",
    )
    parser.add_argument(
        "-s", "--buffer-span-duration", "--buffer_span_duration",
        dest="buffer_span_duration", type=_non_negative_float, metavar="SECONDS",
        help="Determine the duration each node/span in the buffer stores data.",
    )
    parser.add_argument(
        "-t", "--trial-success-required", "--trial_success_required",
        dest="trial_success_required", type=_non_negative_int, metavar="NUMBER",
        help="Set the number of consecutive successes required to close a half-open circuit.",
    )
    parser.add_argument("-c", "--config", help="YAML file with breaker settings.")
    parser.add_argument(
        "-a", "--noautoplay", action="store_true",
        help="Don't auto-play the visualizer and refresh every second.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
    )
    parser.add_argument("-v", "-V", "--version", action="version", version=f"v{__version__}")
    return parser


def _build_config(args: argparse.Namespace, base: BreakerConfig) -> BreakerConfig:
    overrides = {
        field: getattr(args, flag)
        for flag, field in _FLAG_FIELDS.items()
        if getattr(args, flag) is not None
    }
    return replace(base, **overrides)


def parse_args(argv: Sequence[str] | None = None) -> BreakerConfig:
    args = build_parser().parse_args(argv)
    return _build_config(args, load_config(args.config))


def run_session(
    breaker: CircuitBreaker,
    lines: Iterable[str],
    out: TextIO,
    color: bool = True,
    clear: bool = False,
) -> None:
    def draw(last_event: bool | None) -> None:
        if clear:
            out.write(CLEAR_SCREEN)
        out.write(render(breaker, last_event=last_event, color=color))
        out.write("\n")
        out.flush()

    draw(None)
    for line in lines:
        command = line.strip().lower()
        last_event: bool | None = None
        if command == "q":
            break
        if command == "s":
            breaker.record_success()
            last_event = True
        elif command == "f":
            breaker.record_failure()
            last_event = False
        elif command:
            logger.warning("Ignoring unknown command %r", command)
        draw(last_event)


def _stdin_lines(stream: TextIO, autoplay: bool) -> Iterator[str]:
    while True:
        if autoplay:
            ready, _, _ = select.select([stream], [], [], 1.0)
            if not ready:
                yield ""
                continue
        line = stream.readline()
        if not line:
            return
        yield line


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        base = load_config(args.config)
    except (FileNotFoundError, ValueError) as exc:
        parser.exit(1, f"{exc}\n")
    config = _build_config(args, base)
    try:
        breaker = CircuitBreaker(config)
    except ValueError as exc:
        parser.exit(1, f"Invalid settings: {exc}\n")
    logger.info("Starting with settings %s", config.to_metadata())

    autoplay = not args.noautoplay and sys.stdin.isatty()
    try:
        run_session(
            breaker,
            _stdin_lines(sys.stdin, autoplay),
            sys.stdout,
            color=sys.stdout.isatty(),
            clear=autoplay,
        )
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
