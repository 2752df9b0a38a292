"""String primitives for recipe search: edit distance, similarity, keyword index.

Edit distance is delegated to rapidfuzz (Levenshtein, unit costs). Callers
normalize case beforehand; these functions are case-sensitive as given.
"""

import re
import unicodedata

from rapidfuzz.distance import Levenshtein

_NON_SLUG_CHARS = re.compile(r"[^\w\s-]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def edit_distance(a: str, b: str) -> int:
    """Return the Levenshtein distance between a and b.

    Minimum number of single-character insertions, deletions or
    substitutions turning a into b. Total over any two strings.
    """
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Return 1 - distance / max(len(a), len(b)), in [0, 1].

    Two empty strings are identical and score 1.0.
    """
    if not a and not b:
        return 1.0
    return 1.0 - edit_distance(a, b) / max(len(a), len(b))


def strip_accents(text: str) -> str:
    """Remove combining diacritics (NFD decomposition), e.g. 'crème' -> 'creme'."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def title_words(title: str) -> list[str]:
    """Lowercased whitespace-separated words of a title."""
    return title.lower().split()


def build_title_keywords(title: str) -> list[str]:
    """Keyword index stored on each recipe (titleKeywords).

    Lowercased title words plus their accent-stripped forms, de-duplicated
    in first-seen order, so accent-stripped query variants can match.
    """
    keywords: list[str] = []
    seen: set[str] = set()
    for word in title_words(title):
        for form in (word, strip_accents(word)):
            if form not in seen:
                seen.add(form)
                keywords.append(form)
    return keywords


def slugify(title: str) -> str:
    """URL slug for a recipe title ('Crème brûlée !' -> 'creme-brulee')."""
    slug = _NON_SLUG_CHARS.sub("", strip_accents(title)).strip()
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.lower()
