from __future__ import annotations

from enum import Enum


class Pattern(Enum):
    BLINKING = "blinking"
    GLIDING = "gliding"
    VANISHING = "vanishing"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value
