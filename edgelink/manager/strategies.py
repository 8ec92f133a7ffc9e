"""
Identifier generation for edgelink.

RandomStrategy draws each character independently and uniformly from a
62-symbol alphabet (a-z, A-Z, 0-9). At the default length of 6 that is
62**6 (about 5.7e10) possible ids, roughly 35.7 bits.

The source is `random.SystemRandom`, so ids are not predictable from earlier ones.
Uniqueness is not checked here; see IdentifierAllocator for how generated ids
are written.
"""

import random
import string
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from edgelink.config import settings

ID_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
DEFAULT_ID_LENGTH = 6


def _safe_len(length: Optional[int]) -> int:
    """Resolve the id length from arg or config, clamped to [4, 32]."""
    L = int(length) if length is not None else int(getattr(settings, "ID_LENGTH", DEFAULT_ID_LENGTH))
    return max(4, min(32, L))


class BaseStrategy(ABC):
    """Abstract base for short id generation strategies."""

    @abstractmethod
    def generate(self) -> str:
        raise NotImplementedError


@dataclass
class RandomStrategy(BaseStrategy):
    """Uniform random ids over ID_ALPHABET."""

    length: int = DEFAULT_ID_LENGTH
    rng: random.Random = field(default_factory=random.SystemRandom, repr=False)

    def __post_init__(self):
        self.length = _safe_len(self.length)

    def generate(self) -> str:
        return "".join(self.rng.choice(ID_ALPHABET) for _ in range(self.length))


def get_strategy_from_config() -> BaseStrategy:
    """Build the id strategy from settings.ID_LENGTH."""
    return RandomStrategy(length=_safe_len(None))
