"""Typed containers shared across pipeline modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .config import PartRecord


@dataclass
class ScoredCandidate:
    """A catalog part with its running score and match tags, for one search call."""

    part: PartRecord
    score: float
    tags: List[str] = field(default_factory=list)
