"""Morphological variants of a query word for keyword-index lookups.

Covers naive plural/singular toggling and the ie/y alternation only;
this is not a stemmer.
"""

from cuisine.application.services.text_matching import strip_accents


def generate_variants(word: str) -> set[str]:
    """Return the word and its simple variants (lowercased, accent-stripped).

    'recette' -> {'recette', 'recettes'}; 'recettes' -> {'recettes', 'recette'};
    'bougie' -> {'bougie', 'bougies', 'bougy'}; 'curry' -> {'curry', 'currys', 'currie'}.
    """
    base = strip_accents(word.strip().lower())
    if not base:
        return set()
    variants = {base}

    if base.endswith("s"):
        singular = base[:-1]
        if singular:
            variants.add(singular)
    else:
        variants.add(base + "s")

    if base.endswith("ie"):
        variants.add(base[:-2] + "y")
    if base.endswith("y"):
        variants.add(base[:-1] + "ie")
    return variants
