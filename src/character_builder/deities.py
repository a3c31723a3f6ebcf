"""Alignment generation and pantheon/deity affiliation."""

from typing import Dict, Iterable, List, Optional, Tuple, Union

from config.logging_config import get_logger

from .choices import ListPick
from .models import (
    NO_PANTHEON,
    Alignment,
    Attitude,
    Character,
    Deity,
    Domain,
    Morality,
    Pantheon,
    PantheonWeight,
)
from .resolver import SelectionSurface, ShortfallPolicy
from .sampler import WeightedSampler
from .weights import alignment_weight, influence_weight, merge_tiers, tier_weight

logger = get_logger(__name__)

PantheonRef = Union[str, Pantheon]


def choose_alignment(
    sampler: WeightedSampler,
    attitude_influences: Iterable[Attitude] = (),
    morality_influences: Iterable[Morality] = (),
) -> Alignment:
    """
    Generate an alignment, weighted by influences from the rest of the character.

    Each attitude and morality is weighted ``e ** n`` where n is the number of
    influences pointing at it.
    """
    attitude_influences = list(attitude_influences)
    morality_influences = list(morality_influences)
    attitude = sampler.choose(
        list(Attitude), lambda attitude: influence_weight(attitude, attitude_influences)
    )
    morality = sampler.choose(
        list(Morality), lambda morality: influence_weight(morality, morality_influences)
    )
    return Alignment(attitude, morality)


class DeitySurface(SelectionSurface):
    """
    Chooses a pantheon, then a deity within it.

    Pantheons are weighted by preference tier, deities by how well their alignment
    matches the character's leanings. A character that already has a pantheon keeps it.
    """

    name = "deities"
    shortfall_policy = ShortfallPolicy.ALLOW_PARTIAL

    def __init__(self, *args, none_weight: Optional[PantheonWeight] = None, **kwargs):
        """
        Initialize the surface.

        Args:
            none_weight: Tier of the "no pantheon" option; None leaves it out
        """
        super().__init__(*args, **kwargs)
        self.none_weight = none_weight

    def owned(self, character: Character) -> List[Pantheon]:
        return [character.pantheon] if character.pantheon is not None else []

    def fold(self, character: Character, items: List[Deity]) -> List[Deity]:
        if items and character.deity is None:
            character.deity = items[0]
            return items[:1]
        return []

    def _lookup(self, ref: PantheonRef) -> Optional[Pantheon]:
        if isinstance(ref, Pantheon):
            return ref
        try:
            return self.catalog.pantheon(ref)
        except KeyError:
            logger.debug(f"Pantheon {ref} is not in the catalog, skipping")
            return None

    def pantheon_tiers(
        self,
        contributions: Iterable[Tuple[PantheonRef, PantheonWeight]],
        required_domain: Optional[Domain] = None,
    ) -> Dict[Pantheon, PantheonWeight]:
        """
        Merge pantheon preferences and apply the domain restriction.

        Args:
            contributions: (pantheon, tier) pairs from race, background, languages...
            required_domain: Only keep pantheons with a deity of this domain

        Returns:
            Candidate pantheons with their strongest tier. With no usable
            preferences every catalog pantheon is a candidate at the exotic tier.
        """
        pairs = []
        for ref, tier in contributions:
            pantheon = self._lookup(ref)
            if pantheon is not None:
                pairs.append((pantheon, tier))
        tiers = merge_tiers(pairs)
        if not tiers:
            tiers = {pantheon: PantheonWeight.EXOTIC for pantheon in self.catalog.pantheons}

        if required_domain is not None:
            restricted = {
                pantheon: tier
                for pantheon, tier in tiers.items()
                if required_domain in pantheon.domains()
            }
            if not restricted:
                logger.warning(
                    f"No preferred pantheon offers {required_domain.value}, "
                    f"falling back to every pantheon that does"
                )
                restricted = {
                    pantheon: PantheonWeight.EXOTIC
                    for pantheon in self.catalog.pantheons
                    if required_domain in pantheon.domains()
                }
            tiers = restricted
        return tiers

    def choose_pantheon(
        self,
        contributions: Iterable[Tuple[PantheonRef, PantheonWeight]],
        character: Character,
        required_domain: Optional[Domain] = None,
    ) -> Pantheon:
        """Weighted pantheon pick; ``NO_PANTHEON`` when nothing fits."""
        tiers = self.pantheon_tiers(contributions, required_domain)
        # A required domain means the character must worship someone
        if self.none_weight is not None and required_domain is None:
            tiers[NO_PANTHEON] = self.none_weight

        resolver = self.resolver(
            character, weighting=lambda candidates: lambda p: tier_weight(tiers[p])
        )
        picked = resolver.resolve(ListPick(tuple(tiers), 1))
        pantheon = picked[0] if picked else NO_PANTHEON
        logger.debug(f"Chose pantheon {pantheon} from {len(tiers)} candidates")
        return pantheon

    def choose_deity(
        self,
        pantheon: Pantheon,
        character: Character,
        required_domain: Optional[Domain] = None,
    ) -> Optional[Deity]:
        """Deity of the pantheon weighted by alignment overlap with the character."""
        deities = tuple(
            deity
            for deity in pantheon.deities
            if required_domain is None or required_domain in deity.domains
        )
        attitudes = list(character.attitude_influences)
        moralities = list(character.morality_influences)
        resolver = self.resolver(
            character,
            weighting=lambda candidates: lambda deity: alignment_weight(
                deity.alignment, attitudes, moralities
            ),
        )
        picked = resolver.resolve(ListPick(deities, 1))
        return picked[0] if picked else None

    def grant_affiliation(
        self,
        contributions: Iterable[Tuple[PantheonRef, PantheonWeight]],
        character: Character,
        required_domain: Optional[Domain] = None,
    ) -> Optional[Deity]:
        """
        Give the character a pantheon and deity unless it already has one.

        Returns:
            The character's deity (None for no pantheon)
        """
        if character.pantheon is not None:
            logger.debug(f"Character already worships within {character.pantheon}")
            return character.deity

        pantheon = self.choose_pantheon(contributions, character, required_domain)
        character.pantheon = pantheon
        deity = self.choose_deity(pantheon, character, required_domain)
        if deity is not None:
            self.fold(character, [deity])
        return character.deity
