from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from pathlib import Path

from .classifier import MAX_DEPTH, Detection, detect
from .row import FILLED

logger = logging.getLogger(__name__)


def split_lines(content: str) -> list[str]:
    """Split on ``\\n``, dropping one trailing ``\\r`` per line.

    A trailing newline at the end of the content does not start a new line.
    """
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_lines(path: str | Path) -> list[str]:
    # newline="" keeps "\r" so split_lines decides what a line is.
    with open(path, encoding="utf-8", newline="") as fh:
        return split_lines(fh.read())


def _detect_indexed(index: int, line: str, max_depth: int, filled: str) -> tuple[int, Detection]:
    return index, detect(line, max_depth=max_depth, filled=filled)


def _make_executor(kind: str, workers: int | None) -> Executor:
    if kind == "thread":
        return ThreadPoolExecutor(max_workers=workers)
    if kind == "process":
        return ProcessPoolExecutor(max_workers=workers)
    raise ValueError(f"unknown executor {kind!r}")


def classify_lines(
    lines: Sequence[str],
    max_depth: int = MAX_DEPTH,
    filled: str = FILLED,
    workers: int | None = None,
    executor: str = "thread",
) -> list[Detection]:
    """Classify every line in its own task and return results in input order."""
    results: list[tuple[int, Detection]] = []
    with _make_executor(executor, workers) as pool:
        futures = [
            pool.submit(_detect_indexed, index, line, max_depth, filled)
            for index, line in enumerate(lines)
        ]
        for future in as_completed(futures):
            index, detection = future.result()
            logger.debug("line %d: %s at generation %d", index + 1, detection.pattern, detection.generation)
            results.append((index, detection))

    results.sort(key=lambda item: item[0])
    detections = [detection for _, detection in results]

    counts = Counter(str(d.pattern) for d in detections)
    logger.info("classified %d lines: %s", len(detections), dict(sorted(counts.items())))
    return detections


def classify_file(
    path: str | Path,
    max_depth: int = MAX_DEPTH,
    filled: str = FILLED,
    workers: int | None = None,
    executor: str = "thread",
) -> list[Detection]:
    lines = read_lines(path)
    logger.info("read %d lines from %s", len(lines), path)
    return classify_lines(lines, max_depth=max_depth, filled=filled, workers=workers, executor=executor)
