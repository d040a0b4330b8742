"""Records extracted from iqdb pages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class MatchType(str, Enum):
    """Which result panel a match came from."""

    BEST = "best"
    POSSIBLE = "possible"


@dataclass(slots=True, frozen=True)
class Service:
    """Searchable sub-index listed on the iqdb front page."""

    value: int
    name: str
    url: str

    def to_dict(self) -> dict[str, Any]:
        return {"value": self.value, "name": self.name, "url": self.url}


@dataclass(slots=True, frozen=True)
class Match:
    """One best or possible match from a search results page."""

    kind: MatchType
    url: str
    similarity: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "url": self.url,
            "similarity": self.similarity,
        }
