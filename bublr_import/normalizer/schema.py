"""Platform identifiers and normalization result types."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Platform(Enum):
    """Source platforms with a dedicated cleaning rule set.

    GENERIC applies no platform rules; only the universal pass runs.
    """

    MEDIUM = "medium"
    SUBSTACK = "substack"
    BLOGGER = "blogger"
    HASHNODE = "hashnode"
    WORDPRESS = "wordpress"
    GHOST = "ghost"
    DEVTO = "devto"
    GENERIC = "generic"

    @classmethod
    def resolve(cls, value: Any) -> "Platform":
        """Map a caller-supplied identifier to a Platform.

        Accepts Platform members or strings (case-insensitive, surrounding
        whitespace ignored). Anything unrecognized, including None, resolves
        to GENERIC instead of raising.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.GENERIC
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.GENERIC


@dataclass
class NormalizationResult:
    """Output of one normalization run.

    Attributes:
        html: Editor-compatible HTML.
        platform: Platform whose rule set ran.
        rewrites: Number of elements each rule rewrote, keyed by rule name.
            Rules that matched nothing are omitted.
    """

    html: str
    platform: Platform
    rewrites: dict[str, int] = field(default_factory=dict)

    @property
    def total_rewrites(self) -> int:
        return sum(self.rewrites.values())
