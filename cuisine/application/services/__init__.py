"""Application services: pure text matching, correction and scoring."""

from cuisine.application.services.keyword_variants import generate_variants
from cuisine.application.services.local_filter import filter_recipes_locally
from cuisine.application.services.relevance_scorer import RelevanceScorer
from cuisine.application.services.spell_corrector import SpellCorrector
from cuisine.application.services.text_matching import (
    build_title_keywords,
    edit_distance,
    similarity,
    slugify,
    strip_accents,
)

__all__ = [
    "RelevanceScorer",
    "SpellCorrector",
    "build_title_keywords",
    "edit_distance",
    "filter_recipes_locally",
    "generate_variants",
    "similarity",
    "slugify",
    "strip_accents",
]
