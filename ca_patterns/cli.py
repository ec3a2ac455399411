from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from .classifier import Detection
from .config import EXECUTORS, RunConfig, build_run_config, load_run_config
from .data import generate_lines, write_lines
from .runner import classify_file

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _resolve_config(config_path: str | None, overrides: dict[str, Any]) -> RunConfig:
    if config_path:
        return load_run_config(config_path, overrides)
    return build_run_config(overrides)


def _format_detections(detections: list[Detection], output_format: str) -> str:
    if output_format == "json":
        payload = [
            {
                "line": index + 1,
                "pattern": str(d.pattern),
                "generation": d.generation,
                "shift": d.shift,
            }
            for index, d in enumerate(detections)
        ]
        return json.dumps(payload, indent=2)
    return "\n".join(str(d.pattern) for d in detections)


def classify_cli(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="ca-patterns",
        description="Classify each line of a file as blinking, gliding, vanishing or other",
    )
    parser.add_argument("filename", nargs="?", help="Input file, one row per line")
    parser.add_argument("--config", default=None, help="Path to run config YAML")
    parser.add_argument("--max-depth", type=int, default=None)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--executor", default=None, choices=list(EXECUTORS))
    parser.add_argument("--json", action="store_true", help="Emit JSON with generation and shift")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    if args.filename is None:
        print(parser.format_usage(), end="")
        return 0

    _setup_logging(args.verbose)

    overrides: dict[str, Any] = {}
    if args.max_depth is not None:
        overrides["classify"] = {"max_depth": args.max_depth}
    if args.workers is not None:
        overrides["workers"] = args.workers
    if args.executor is not None:
        overrides["executor"] = args.executor
    if args.json:
        overrides["output_format"] = "json"

    try:
        cfg = _resolve_config(args.config, overrides)
    except (OSError, ValueError, TypeError) as exc:
        logger.error("invalid config: %s", exc)
        return 1

    try:
        detections = classify_file(
            args.filename,
            max_depth=cfg.classify.max_depth,
            filled=cfg.classify.filled,
            workers=cfg.workers,
            executor=cfg.executor,
        )
    except OSError as exc:
        logger.error("could not read %s: %s", args.filename, exc)
        return 1
    except UnicodeDecodeError as exc:
        logger.error("%s is not valid UTF-8 text: %s", args.filename, exc)
        return 1

    text = _format_detections(detections, cfg.output_format)
    if text:
        print(text)
    return 0


def generate_cli(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="ca-patterns-generate",
        description="Write random rows for classification",
    )
    parser.add_argument("--out", required=True, help="Output file path")
    parser.add_argument("--config", default=None, help="Path to run config YAML")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--lines", type=int, default=None)
    parser.add_argument("--density", type=float, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--split", default="test")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    generate: dict[str, Any] = {}
    for key, value in (
        ("width", args.width),
        ("n_lines", args.lines),
        ("density", args.density),
        ("seed", args.seed),
    ):
        if value is not None:
            generate[key] = value

    try:
        cfg = _resolve_config(args.config, {"generate": generate} if generate else {})
    except (OSError, ValueError, TypeError) as exc:
        logger.error("invalid config: %s", exc)
        return 1

    lines = generate_lines(
        cfg.generate,
        split=args.split,
        filled=cfg.classify.filled,
        empty=cfg.classify.empty,
    )
    try:
        write_lines(lines, args.out)
    except OSError as exc:
        logger.error("could not write %s: %s", args.out, exc)
        return 1
    logger.info("wrote %d lines to %s", len(lines), args.out)
    return 0
