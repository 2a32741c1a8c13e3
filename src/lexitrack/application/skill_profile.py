"""
Learner skill profile across linguistic difficulty factors.

Each word belongs to zero or more factor categories (rare frequency,
polysemy, complex morphology, idiom). After every answer, the learner's
score for each of the word's factors moves by an exponential moving average:

    new = old * (1 - alpha) + (+DELTA if correct else -DELTA) * alpha

Scores stay in [-100, 100]; clearly negative scores mark a weakness.
"""

import operator
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from lexitrack.domain.constants import (
    SKILL_DELTA,
    SKILL_EMA_ALPHA,
    SKILL_SCORE_MAX,
    SKILL_SCORE_MIN,
    SKILL_WEAKNESS_THRESHOLD,
)

from .utils.numeric import clamp, round_half_up


class SkillFactor(str, Enum):
    FREQUENCY = "frequency"
    POLYSEMY = "polysemy"
    MORPHOLOGY = "morphology"
    IDIOM = "idiom"


@dataclass(frozen=True)
class WordTraits:
    """
    Dictionary metadata that places a word into skill factors.

    Attributes:
        frequency_band: 1 (common) .. 5 (rare).
        polysemy_level: 1 (single meaning) .. 4 (many meanings).
        morph_complexity: 1 (simple) .. 4 (complex).
        phrase_flag: Word is a multi-word phrase.
        translation_kind: Free-form kind label, e.g. "idiomatic".
    """

    frequency_band: int | None = None
    polysemy_level: int | None = None
    morph_complexity: int | None = None
    phrase_flag: bool = False
    translation_kind: str | None = None


@dataclass(frozen=True)
class SkillProfile:
    frequency_score: int = 0
    polysemy_score: int = 0
    morph_score: int = 0
    idiom_score: int = 0
    total_updates: int = 0

    def score(self, factor: SkillFactor) -> int:
        return getattr(self, _FIELD[factor])


_FIELD = {
    SkillFactor.FREQUENCY: "frequency_score",
    SkillFactor.POLYSEMY: "polysemy_score",
    SkillFactor.MORPHOLOGY: "morph_score",
    SkillFactor.IDIOM: "idiom_score",
}


def word_factors(traits: WordTraits) -> frozenset[SkillFactor]:
    factors = set()
    if traits.frequency_band is not None and traits.frequency_band >= 4:
        factors.add(SkillFactor.FREQUENCY)
    if traits.polysemy_level is not None and traits.polysemy_level >= 3:
        factors.add(SkillFactor.POLYSEMY)
    if traits.morph_complexity is not None and traits.morph_complexity >= 3:
        factors.add(SkillFactor.MORPHOLOGY)
    kind = (traits.translation_kind or "").lower()
    if traits.phrase_flag or "idiom" in kind:
        factors.add(SkillFactor.IDIOM)
    return frozenset(factors)


def ema_step(old_score: int, correct: bool) -> int:
    signal = SKILL_DELTA if correct else -SKILL_DELTA
    new_score = old_score * (1 - SKILL_EMA_ALPHA) + signal * SKILL_EMA_ALPHA
    return round_half_up(clamp(new_score, SKILL_SCORE_MIN, SKILL_SCORE_MAX))


def update_skill_profile(
    profile: SkillProfile | None,
    traits: WordTraits,
    correct: bool,
) -> SkillProfile:
    """
    Fold one answer into the profile.

    Words without any factor leave the profile untouched (total_updates included).
    """
    profile = profile or SkillProfile()
    factors = word_factors(traits)
    if not factors:
        return profile

    changes = {_FIELD[f]: ema_step(profile.score(f), correct) for f in factors}
    return replace(profile, total_updates=profile.total_updates + 1, **changes)


def dominant_weakness(profile: SkillProfile | None) -> tuple[SkillFactor | None, int]:
    """
    Lowest-scoring factor below the weakness threshold.

    Returns:
        (factor, score), or (None, 0) when there is no clear weakness.
    """
    if profile is None:
        return None, 0

    weak = [
        (f, profile.score(f))
        for f in SkillFactor
        if profile.score(f) < SKILL_WEAKNESS_THRESHOLD
    ]
    if not weak:
        return None, 0
    return min(weak, key=lambda pair: pair[1])


@dataclass(frozen=True)
class WeaknessFilter:
    """
    Selection rule for words that exercise one skill factor.

    Attributes:
        trait: WordTraits attribute (and dictionary column) to test.
        op: "gte" or "eq".
        value: Threshold or expected value.
    """

    trait: str
    op: str
    value: Any

    def matches(self, traits: WordTraits) -> bool:
        actual = getattr(traits, self.trait)
        if actual is None:
            return False
        return _OPS[self.op](actual, self.value)


_OPS: dict[str, Callable[[Any, Any], bool]] = {"gte": operator.ge, "eq": operator.eq}

_WEAKNESS_FILTERS = {
    SkillFactor.FREQUENCY: WeaknessFilter("frequency_band", "gte", 4),
    SkillFactor.POLYSEMY: WeaknessFilter("polysemy_level", "gte", 3),
    SkillFactor.MORPHOLOGY: WeaknessFilter("morph_complexity", "gte", 3),
    SkillFactor.IDIOM: WeaknessFilter("phrase_flag", "eq", True),
}


def weakness_filter(factor: SkillFactor | str | None) -> WeaknessFilter | None:
    """Rule for picking practice words that target `factor`; None if unknown."""
    if factor is None:
        return None
    try:
        return _WEAKNESS_FILTERS[SkillFactor(factor)]
    except ValueError:
        return None
