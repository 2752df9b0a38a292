"""Relevance scoring of a recipe title against query words."""

from collections.abc import Sequence

from cuisine.application.dtos.search import SearchTuning
from cuisine.application.services.text_matching import similarity, title_words
from cuisine.domain.entities.recipe import SearchableItem


class RelevanceScorer:
    """Best-single-signal scorer.

    Per query word the score is the max of: edit-distance similarity to the
    closest title word, the containment bonus when the whole title contains
    the word, and the prefix bonus when a title word starts with it. The item
    score is the max over query words, so one strong match dominates.
    """

    def __init__(self, tuning: SearchTuning | None = None) -> None:
        self.tuning = tuning or SearchTuning()

    def word_score(self, word: str, title: str) -> float:
        """Score one lowercased query word against one lowercased title."""
        words = title.split()
        best = max((similarity(word, t) for t in words), default=0.0)
        if word and word in title:
            best = max(best, self.tuning.containment_bonus)
        if word and any(t.startswith(word) for t in words):
            best = max(best, self.tuning.prefix_bonus)
        return best

    def score(self, item: SearchableItem, query_words: Sequence[str]) -> float:
        title = " ".join(title_words(item.title))
        return max((self.word_score(w, title) for w in query_words), default=0.0)

    def passes(self, score: float) -> bool:
        """True when score reaches the threshold (boundary inclusive)."""
        return score >= self.tuning.similarity_threshold
