from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .classifier import MAX_DEPTH
from .row import EMPTY, FILLED

EXECUTORS = ("thread", "process")
OUTPUT_FORMATS = ("text", "json")


@dataclass
class ClassifyConfig:
    max_depth: int = MAX_DEPTH
    filled: str = FILLED
    empty: str = EMPTY

    def __post_init__(self) -> None:
        if self.max_depth < 2:
            raise ValueError(f"max_depth must be >= 2, got {self.max_depth}")
        if len(self.filled) != 1 or len(self.empty) != 1:
            raise ValueError("filled and empty markers must be single characters")
        if self.filled == self.empty:
            raise ValueError("filled and empty markers must differ")


@dataclass
class GenerateConfig:
    width: int = 32
    n_lines: int = 100
    density: float = 0.5
    seed: int = 1337

    def __post_init__(self) -> None:
        if self.width < 0 or self.n_lines < 0:
            raise ValueError("width and n_lines must be >= 0")
        if not 0.0 <= self.density <= 1.0:
            raise ValueError(f"density must be in [0, 1], got {self.density}")


@dataclass
class RunConfig:
    name: str = "default"
    workers: int | None = None
    executor: str = "thread"
    output_format: str = "text"
    classify: ClassifyConfig = field(default_factory=ClassifyConfig)
    generate: GenerateConfig = field(default_factory=GenerateConfig)

    def __post_init__(self) -> None:
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be >= 1 or null, got {self.workers}")
        if self.executor not in EXECUTORS:
            raise ValueError(f"executor must be one of {EXECUTORS}, got {self.executor!r}")
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of {OUTPUT_FORMATS}, got {self.output_format!r}")


def _deep_update(target: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_update(target[key], value)
        else:
            target[key] = value
    return target


def build_run_config(overrides: dict[str, Any] | None = None) -> RunConfig:
    base = asdict(RunConfig())
    if overrides:
        _deep_update(base, overrides)

    classify = ClassifyConfig(**base.pop("classify"))
    generate = GenerateConfig(**base.pop("generate"))
    return RunConfig(classify=classify, generate=generate, **base)


def load_run_config(path: str | Path, overrides: dict[str, Any] | None = None) -> RunConfig:
    try:
        raw = yaml.safe_load(Path(path).read_text()) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"could not parse run config {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"run config {path} must be a mapping")
    if overrides:
        _deep_update(raw, overrides)
    return build_run_config(raw)


def save_run_config(config: RunConfig, path: str | Path) -> None:
    payload = asdict(config)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    Path(path).write_text(yaml.safe_dump(payload, sort_keys=False))
