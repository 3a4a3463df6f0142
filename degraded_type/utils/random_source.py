# /degraded_type/utils/random_source.py

from typing import Optional

import numpy as np

class NumpyRandomSource:
    """Adapts a NumPy Generator to the `next() -> float in [0, 1)` interface."""

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    @classmethod
    def seeded(cls, seed: int) -> "NumpyRandomSource":
        return cls(np.random.default_rng(seed))

    def next(self) -> float:
        return float(self.rng.random())
