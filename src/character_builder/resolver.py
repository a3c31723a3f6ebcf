"""
Choice resolution engine shared by every selection surface.

A surface rewrites its shorthand specifications into ``ListPick`` / ``CompositePick``
trees; the ``ChoiceResolver`` then walks the tree, filtering against what is already
owned, sampling, and covering shortfalls according to the surface's policy.
"""

from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Sequence

from config.logging_config import get_logger
from src.core.error_handling import ValidationError

from .catalog import Catalog, default_catalog
from .choices import ChoiceSpec, CompositePick, ListPick
from .errors import CandidatesExhaustedError, ResolutionDepthError
from .filters import filter_candidates
from .models import Character
from .sampler import WeightedSampler, WeightFn

logger = get_logger(__name__)

Weighting = Callable[[Sequence[Any]], Optional[WeightFn]]
Preference = Callable[[Sequence[Any]], Sequence[Any]]

DEFAULT_MAX_DEPTH = 16


class ShortfallPolicy(Enum):
    """What a surface does when a draw comes up short."""

    WIDEN_AND_RETRY = "widen_and_retry"
    ALLOW_PARTIAL = "allow_partial"


class CompositeDuplicates(Enum):
    """Whether sub-specifications of a composite see each other's picks."""

    EXCLUDE = "exclude"
    PERMIT = "permit"


class ChoiceResolver:
    """Resolves primitive choice specifications into concrete picks."""

    def __init__(
        self,
        sampler: WeightedSampler,
        policy: ShortfallPolicy = ShortfallPolicy.WIDEN_AND_RETRY,
        duplicates: CompositeDuplicates = CompositeDuplicates.EXCLUDE,
        max_depth: int = DEFAULT_MAX_DEPTH,
        weighting: Optional[Weighting] = None,
        preference: Optional[Preference] = None,
        surface: str = "selection",
    ):
        """
        Initialize the resolver.

        Args:
            sampler: Source of all random draws
            policy: Shortfall handling for list picks and composites
            duplicates: Composite duplicate handling
            max_depth: Deepest nesting/retry chain allowed before failing
            weighting: Maps a candidate list to a weight function (None = uniform)
            preference: Maps a candidate list to its preferred tier; a non-empty
                tier replaces the candidates outright
            surface: Name used in logs and error context
        """
        self.sampler = sampler
        self.policy = policy
        self.duplicates = duplicates
        self.max_depth = max_depth
        self.weighting = weighting
        self.preference = preference
        self.surface = surface

    def resolve(self, spec: ChoiceSpec, owned: Iterable[Any] = ()) -> List[Any]:
        """
        Resolve a primitive specification tree.

        Args:
            spec: ``ListPick`` or ``CompositePick`` tree
            owned: Items already possessed; never returned

        Returns:
            Picked items in draw order

        Raises:
            CandidatesExhaustedError: Widening could not cover a shortfall
            ResolutionDepthError: The resolution chain exceeded ``max_depth``
        """
        return self._resolve(spec, list(owned), 0)

    def _resolve(self, spec: ChoiceSpec, owned: List[Any], depth: int) -> List[Any]:
        self._check_depth(depth)
        if isinstance(spec, ListPick):
            return self._resolve_list(spec, owned, depth)
        if isinstance(spec, CompositePick):
            return self._resolve_composite(spec, owned, depth)
        raise ValidationError(
            f"Cannot resolve unexpanded specification {spec!r}", field="spec"
        )

    def _check_depth(self, depth: int) -> None:
        if depth > self.max_depth:
            logger.error(f"Resolution depth {depth} exceeds limit of {self.max_depth}")
            raise ResolutionDepthError(
                f"Choice resolution nested deeper than {self.max_depth} levels",
                depth=depth,
                surface=self.surface,
            )

    def _draw(self, candidates: List[Any], amount: int) -> List[Any]:
        if self.preference is not None:
            preferred = list(self.preference(candidates))
            if preferred:
                candidates = preferred
        weight_fn = self.weighting(candidates) if self.weighting is not None else None
        return self.sampler.sample(candidates, amount, weight_fn)

    def _resolve_list(self, pick: ListPick, owned: List[Any], depth: int) -> List[Any]:
        candidates = filter_candidates(pick.candidates, owned)
        picked = self._draw(candidates, pick.amount)
        shortfall = pick.amount - len(picked)
        if shortfall <= 0:
            return picked

        if self.policy == ShortfallPolicy.ALLOW_PARTIAL or pick.widen_to is None:
            logger.warning(
                f"[{self.surface}] Returning {len(picked)} of {pick.amount} requested items"
            )
            return picked

        logger.warning(
            f"[{self.surface}] Widening candidate pool to cover {shortfall} missing items"
        )
        self._check_depth(depth + 1)
        widened = filter_candidates(pick.widen_to, owned + picked)
        picked.extend(self._draw(widened, shortfall))

        if len(picked) < pick.amount:
            logger.error(
                f"[{self.surface}] Widened pool exhausted: {len(picked)} of {pick.amount}"
            )
            raise CandidatesExhaustedError(
                f"Only {len(picked)} of {pick.amount} items could be picked",
                requested=pick.amount,
                picked=len(picked),
                surface=self.surface,
            )
        return picked

    def _resolve_composite(
        self, pick: CompositePick, owned: List[Any], depth: int
    ) -> List[Any]:
        if pick.amount <= 0:
            return []
        chosen = self.sampler.sample(list(pick.options), pick.amount)
        logger.debug(f"[{self.surface}] Activated {len(chosen)} of {len(pick.options)} options")

        results: List[Any] = []
        for option in chosen:
            seen = owned + results if self.duplicates == CompositeDuplicates.EXCLUDE else owned
            results.extend(self._resolve(option, seen, depth + 1))

        shortfall = pick.amount - len(results)
        if shortfall <= 0:
            return results

        if not results:
            if self.policy == ShortfallPolicy.WIDEN_AND_RETRY:
                logger.error(f"[{self.surface}] Composite pick made no progress")
                raise CandidatesExhaustedError(
                    f"No option could supply any of {pick.amount} requested items",
                    requested=pick.amount,
                    picked=0,
                    surface=self.surface,
                )
            logger.warning(f"[{self.surface}] Composite pick made no progress")
            return results

        retry_owned = owned + results if self.duplicates == CompositeDuplicates.EXCLUDE else owned
        retry = CompositePick(pick.options, shortfall)
        results.extend(self._resolve(retry, retry_owned, depth + 1))
        return results


class SelectionSurface:
    """
    One domain-specific use of the resolver.

    Subclasses define the shorthand expansion, what counts as owned, how results are
    folded into the character and optionally a weighting or a preferred tier.
    """

    name = "selection"
    shortfall_policy = ShortfallPolicy.WIDEN_AND_RETRY

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        sampler: Optional[WeightedSampler] = None,
        max_resolution_depth: int = DEFAULT_MAX_DEPTH,
        composite_duplicates: CompositeDuplicates = CompositeDuplicates.EXCLUDE,
    ):
        self.catalog = catalog if catalog is not None else default_catalog()
        self.sampler = sampler if sampler is not None else WeightedSampler()
        self.max_resolution_depth = max_resolution_depth
        self.composite_duplicates = composite_duplicates

    @classmethod
    def from_settings(cls, settings, catalog: Optional[Catalog] = None, sampler=None, **kwargs):
        """Build a surface using the engine values from a ``Settings`` instance."""
        return cls(
            catalog=catalog,
            sampler=sampler if sampler is not None else WeightedSampler(seed=settings.seed),
            max_resolution_depth=settings.max_resolution_depth,
            composite_duplicates=CompositeDuplicates(settings.composite_duplicates),
            **kwargs,
        )

    # Hooks

    def expand_shorthand(self, spec: ChoiceSpec) -> ChoiceSpec:
        raise ValidationError(
            f"{type(spec).__name__} is not supported by the {self.name} surface", field="spec"
        )

    def owned(self, character: Character) -> List[Any]:
        return []

    def weighting(self, character: Character) -> Optional[Weighting]:
        return None

    def preference(self, character: Character) -> Optional[Preference]:
        return None

    def fold(self, character: Character, items: List[Any]) -> List[Any]:
        """Add resolved items to the character. Returns what was actually added."""
        raise NotImplementedError

    def order(self, specs: List[ChoiceSpec]) -> List[ChoiceSpec]:
        return specs

    # Engine

    def expand(self, spec: ChoiceSpec) -> ChoiceSpec:
        """Rewrite shorthands into a tree of ``ListPick`` and ``CompositePick`` only."""
        if isinstance(spec, ListPick):
            return spec
        if isinstance(spec, CompositePick):
            return CompositePick(tuple(self.expand(option) for option in spec.options), spec.amount)
        return self.expand(self.expand_shorthand(spec))

    def resolver(self, character: Character, **overrides) -> ChoiceResolver:
        options = {
            "policy": self.shortfall_policy,
            "duplicates": self.composite_duplicates,
            "max_depth": self.max_resolution_depth,
            "weighting": self.weighting(character),
            "preference": self.preference(character),
            "surface": self.name,
        }
        options.update(overrides)
        return ChoiceResolver(self.sampler, **options)

    def resolve(self, spec: ChoiceSpec, character: Character) -> List[Any]:
        """Resolve one specification against the character without changing it."""
        expanded = self.expand(spec)
        picked = self.resolver(character).resolve(expanded, self.owned(character))
        logger.debug(f"[{self.name}] Resolved {type(spec).__name__} to {len(picked)} items")
        return picked

    def grant(self, specs: Iterable[ChoiceSpec], character: Character) -> List[Any]:
        """
        Resolve each specification in turn, folding results into the character.

        Later specifications see the results of earlier ones.
        """
        granted: List[Any] = []
        for spec in self.order(list(specs)):
            granted.extend(self.fold(character, self.resolve(spec, character)))
        return granted


def universe_size(spec: ChoiceSpec) -> int:
    """Number of candidates an expanded specification draws from."""
    if isinstance(spec, ListPick):
        return len(spec.candidates)
    if isinstance(spec, CompositePick):
        return sum(universe_size(option) for option in spec.options)
    return 0
