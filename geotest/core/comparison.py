"""Classify mismatches between an expected and a produced transliteration."""
from typing import Callable, List, Tuple

import regex

from geotest.core.models import ComparisonResult

# Unicode Alphabetic includes letters, letter numbers and vowel signs or
# points (Other_Alphabetic); plain diacritic marks such as U+0306 are not.
NOT_ALPHA_OR_SPACE = regex.compile(r"[^\p{Alphabetic}\p{White_Space}]")
NOT_ALPHA = regex.compile(r"[^\p{Alphabetic}]")


def strip_punctuation(text: str) -> str:
    """Drop everything that is neither alphabetic nor whitespace."""
    return NOT_ALPHA_OR_SPACE.sub("", text)


def strip_non_alpha(text: str) -> str:
    """Drop everything that is not alphabetic, whitespace included."""
    return NOT_ALPHA.sub("", text)


def _fold(normalize: Callable[[str], str]) -> Callable[[str], str]:
    return lambda text: normalize(text.lower())


def _identity(text: str) -> str:
    return text


# Progressively more permissive normalizations. The first level under which
# both strings agree names the mildest explanation of the difference.
CASCADE: List[Tuple[ComparisonResult, Callable[[str], str]]] = [
    (ComparisonResult.OK, _identity),
    (ComparisonResult.CASING, str.lower),
    (ComparisonResult.PUNCTUATION, strip_punctuation),
    (ComparisonResult.CASING_AND_PUNCTUATION, _fold(strip_punctuation)),
    (ComparisonResult.SPACING_OR_PUNCTUATION, strip_non_alpha),
    (ComparisonResult.CASING_AND_SPACING_OR_PUNCTUATION, _fold(strip_non_alpha)),
]


def classify(expected: str, produced: str) -> ComparisonResult:
    """
    Compare two transliterations and name the kind of discrepancy.
    
    Args:
        expected: Transliteration produced by the engine
        produced: Transliteration recorded in the gazetteer
        
    Returns:
        ComparisonResult.OK when equal, otherwise the first cascade level
        at which they agree, or TRANSLITERATION when none does
    """
    for result, normalize in CASCADE:
        if normalize(expected) == normalize(produced):
            return result
    return ComparisonResult.TRANSLITERATION
