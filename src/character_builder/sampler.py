"""Weighted sampling without replacement."""

import math
import random
from typing import Callable, List, Optional, Sequence, TypeVar

from config.logging_config import get_logger

from .errors import SamplingError

logger = get_logger(__name__)

T = TypeVar("T")

WeightFn = Callable[[T], float]


class WeightedSampler:
    """
    Draws distinct items from a candidate list using a seeded random source.

    The sampler never retries or widens: asking for more than is available simply
    returns every candidate (in drawn order).
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        """
        Initialize the sampler.

        Args:
            rng: Random source to draw from; takes precedence over ``seed``
            seed: Seed for a private random source when no ``rng`` is given
        """
        self.rng = rng if rng is not None else random.Random(seed)

    def sample(
        self,
        candidates: Sequence[T],
        count: int,
        weight_fn: Optional[WeightFn] = None,
    ) -> List[T]:
        """
        Draw up to ``count`` distinct candidates.

        Args:
            candidates: Distinct eligible items
            count: Number of items wanted
            weight_fn: Per-item weight; uniform when omitted

        Returns:
            ``min(count, len(candidates))`` items, no item twice

        Raises:
            SamplingError: If a weight is not a positive finite number
        """
        if count <= 0 or not candidates:
            return []
        count = min(count, len(candidates))

        if weight_fn is None:
            picked = self.rng.sample(list(candidates), count)
        else:
            picked = self._weighted_sample(candidates, count, weight_fn)

        logger.debug(f"Drew {len(picked)} of {len(candidates)} candidates")
        return picked

    def choose(self, candidates: Sequence[T], weight_fn: Optional[WeightFn] = None) -> T:
        """Draw exactly one item. An empty candidate list is an error here."""
        picked = self.sample(candidates, 1, weight_fn)
        if not picked:
            raise SamplingError("Cannot choose from an empty candidate list")
        return picked[0]

    def _weighted_sample(
        self, candidates: Sequence[T], count: int, weight_fn: WeightFn
    ) -> List[T]:
        # Efraimidis-Spirakis: key u ** (1 / w), keep the largest keys
        keyed = []
        for index, candidate in enumerate(candidates):
            weight = weight_fn(candidate)
            if not isinstance(weight, (int, float)) or not math.isfinite(weight) or weight <= 0:
                raise SamplingError(
                    f"Invalid weight {weight!r} for candidate {candidate}",
                    context={"candidate": str(candidate), "weight": repr(weight)},
                )
            keyed.append((self.rng.random() ** (1.0 / weight), index))

        keyed.sort(key=lambda pair: (-pair[0], pair[1]))
        return [candidates[index] for _, index in keyed[:count]]
