from __future__ import annotations

import random
import threading


class SynchronizedRandom:
    """``random.Random`` behind a lock, for one generator shared across threads."""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)
        self._lock = threading.Lock()

    def random(self) -> float:
        with self._lock:
            return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        with self._lock:
            return self._rng.randint(a, b)

    def seed(self, value: int | None) -> None:
        with self._lock:
            self._rng.seed(value)
