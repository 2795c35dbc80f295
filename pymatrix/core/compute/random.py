"""
Uniform random source for the random() factory.

The generator is an explicit, seedable dependency rather than ambient
global state, so randomized construction stays reproducible in tests.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.exceptions import ValidationError

# 32-bit draws scaled by the largest draw give [0, 1] with both ends reachable
_UINT32_MAX = 0xFFFFFFFF


class UniformSource:
    """
    Produces doubles uniformly distributed on the closed interval [0, 1].

    Args:
        seed: None for OS entropy, an int seed, or an existing
            numpy.random.Generator to draw from
    """

    def __init__(self, seed: int | np.random.Generator | None = None):
        if isinstance(seed, np.random.Generator):
            self._rng = seed
        elif seed is None or isinstance(seed, (int, np.integer)):
            self._rng = np.random.default_rng(seed)
        else:
            raise ValidationError(
                f"seed: expected None, int or numpy.random.Generator, "
                f"got {type(seed).__name__}"
            )

    @property
    def generator(self) -> np.random.Generator:
        return self._rng

    def uniform(self, shape: tuple[int, int]) -> NDArray[np.float64]:
        """Draw an array of the given shape with values in [0, 1]."""
        draws = self._rng.integers(0, _UINT32_MAX, size=shape, endpoint=True, dtype=np.uint64)
        return draws.astype(np.float64) / _UINT32_MAX


def as_uniform_source(
    rng: UniformSource | np.random.Generator | int | None,
) -> UniformSource:
    """Coerce a seed, Generator or UniformSource into a UniformSource."""
    if isinstance(rng, UniformSource):
        return rng
    return UniformSource(rng)
