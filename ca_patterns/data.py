from __future__ import annotations

import hashlib
from pathlib import Path

import numpy as np

from .config import GenerateConfig
from .row import EMPTY, FILLED


def _seed_for_split(seed: int, split: str) -> int:
    digest = hashlib.sha256(f"{seed}:{split}".encode()).digest()
    return int.from_bytes(digest[:8], "little") & 0x7FFFFFFF


def random_cells(config: GenerateConfig, split: str = "test") -> np.ndarray:
    """Boolean array of shape [n_lines, width]; True marks a filled cell."""
    rng = np.random.default_rng(_seed_for_split(config.seed, split))
    return rng.random(size=(config.n_lines, config.width)) < config.density


def cells_to_lines(cells: np.ndarray, filled: str = FILLED, empty: str = EMPTY) -> list[str]:
    if cells.ndim != 2:
        raise ValueError(f"cells must be 2-D, got shape {cells.shape}")
    chars = np.where(cells.astype(bool), filled, empty)
    return ["".join(row) for row in chars.tolist()]


def generate_lines(
    config: GenerateConfig,
    split: str = "test",
    filled: str = FILLED,
    empty: str = EMPTY,
) -> list[str]:
    return cells_to_lines(random_cells(config, split), filled=filled, empty=empty)


def write_lines(lines: list[str], path: str | Path) -> None:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
