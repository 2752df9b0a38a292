"""Spell correction of query words against the vocabulary of known titles.

The vocabulary is small (hundreds of titles), so a linear scan per word is
acceptable. A larger corpus needs an indexed matcher (BK-tree, trigrams).
"""

from collections.abc import Iterable

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from cuisine.application.services.text_matching import title_words

DEFAULT_MAX_DISTANCE = 2


class SpellCorrector:
    """Replace a word by its closest known title word when close enough."""

    def __init__(
        self,
        titles: Iterable[str],
        max_distance: int = DEFAULT_MAX_DISTANCE,
    ) -> None:
        vocabulary: dict[str, None] = {}
        for title in titles:
            for word in title_words(title):
                vocabulary.setdefault(word, None)
        self._vocabulary = list(vocabulary)
        self.max_distance = max_distance

    @property
    def vocabulary(self) -> list[str]:
        return list(self._vocabulary)

    def correct(self, word: str) -> str:
        """Return the closest vocabulary word if within max_distance, else word.

        Ties keep the word that appears first in corpus order.
        """
        word = word.lower()
        if not word or not self._vocabulary:
            return word
        match = process.extractOne(
            word,
            self._vocabulary,
            scorer=Levenshtein.distance,
            score_cutoff=self.max_distance,
        )
        if match is None:
            return word
        return match[0]

    def correct_words(self, words: Iterable[str]) -> list[str]:
        return [self.correct(w) for w in words]

    def correct_query(self, text: str) -> str:
        """Correct each whitespace token independently and rejoin with spaces."""
        return " ".join(self.correct_words(text.lower().split()))
