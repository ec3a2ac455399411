from __future__ import annotations

from dataclasses import dataclass

from .pattern import Pattern
from .row import FILLED, Row

MAX_DEPTH = 100


@dataclass(frozen=True)
class Detection:
    pattern: Pattern
    generation: int
    shift: int = 0


def detect(line: str, max_depth: int = MAX_DEPTH, filled: str = FILLED) -> Detection:
    """Evolve ``line`` until it vanishes, repeats, translates, or the budget runs out.

    The initial row counts as generation 1, so at most ``max_depth - 1``
    steps are taken. Checks run in a fixed order: vanishing, then exact
    repeats, then translations, then the budget.
    """
    if max_depth < 2:
        raise ValueError(f"max_depth must be >= 2, got {max_depth}")

    current = Row.from_string(line, filled=filled)
    history: list[Row] = [current]
    depth = 2

    while True:
        nxt = current.step()

        if not nxt:
            return Detection(Pattern.VANISHING, depth)

        # The row that produced nxt is left out of the repeat check.
        if any(nxt == prev for prev in history[:-1]):
            return Detection(Pattern.BLINKING, depth)

        for prev in history:
            if nxt.glides_onto(prev):
                return Detection(Pattern.GLIDING, depth, shift=nxt.min - prev.min)

        if depth >= max_depth:
            return Detection(Pattern.OTHER, depth)

        history.append(nxt)
        depth += 1
        current = nxt


def classify(line: str, max_depth: int = MAX_DEPTH, filled: str = FILLED) -> Pattern:
    return detect(line, max_depth=max_depth, filled=filled).pattern
