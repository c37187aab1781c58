import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from faker import Faker

## === Config Class === ##

@dataclass
class SentenceConfig:
    """
    Configuration for SentenceGenerator
        min_words: int, shortest sentence (in word tokens)
        max_words: int, longest sentence (in word tokens)
        prefix_freq: float, probability that a sentence reuses the opening of an earlier one
        seed: int, seed for random number generators
    """
    min_words: int = 2
    max_words: int = 6
    prefix_freq: float = 0.3
    seed: Optional[int] = None

    def __post_init__(self):
        if self.min_words < 1:
            raise ValueError("min_words must be at least 1")
        if self.max_words < self.min_words:
            raise ValueError("max_words must be >= min_words")
        if not 0.0 <= self.prefix_freq <= 1.0:
            raise ValueError("prefix_freq must be between 0 and 1")


class SentenceGenerator:
    """Word-token sentences; a shared opening shows up as a multi-word segment."""

    def __init__(self, config: SentenceConfig):
        self.config = config
        self.rng = random.Random(self.config.seed)

        self.fake = Faker()
        if self.config.seed is not None:
            self.fake.seed_instance(self.config.seed)

    def _fresh(self, length: int) -> List[str]:
        return [w.lower() for w in self.fake.words(nb=length)]

    def batch(self, n: int) -> List[Tuple[str, ...]]:
        if n <= 0:
            raise ValueError("n must be positive")
        cfg = self.config
        out: List[Tuple[str, ...]] = []
        for _ in range(n):
            length = self.rng.randint(cfg.min_words, cfg.max_words)
            if out and length > 1 and self.rng.random() < cfg.prefix_freq:
                donor = self.rng.choice(out)
                keep = self.rng.randint(1, min(len(donor), length - 1))
                words = list(donor[:keep]) + self._fresh(length - keep)
            else:
                words = self._fresh(length)
            out.append(tuple(words))
        return out


def generate_int_sequences(num_sequences, min_len=1, max_len=6, alphabet=10, seed=None):
    """Return integer token sequences with values in [0, alphabet).

    A small alphabet makes shared prefixes, and therefore long segments,
    more likely.
    """
    if num_sequences < 1:
        raise ValueError("num_sequences must be positive")
    if min_len < 0 or max_len < min_len:
        raise ValueError("need 0 <= min_len <= max_len")
    if alphabet < 1:
        raise ValueError("alphabet must be positive")
    rng = np.random.default_rng(seed)
    lengths = rng.integers(min_len, max_len + 1, size=num_sequences)
    return [tuple(rng.integers(0, alphabet, size=int(n)).tolist()) for n in lengths]
