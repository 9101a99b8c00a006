"""Alert transition and breach types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Transition(Enum):
    NONE = "none"
    FIRED = "fired"
    CLEARED = "cleared"


@dataclass(frozen=True)
class Breach:
    metric: str  # cpu, mem
    value: float
    threshold: int
