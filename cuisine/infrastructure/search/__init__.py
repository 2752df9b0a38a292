"""Search support backed by infrastructure (title corpus)."""

from cuisine.infrastructure.search.title_corpus import TitleCorpusProvider

__all__ = ["TitleCorpusProvider"]
