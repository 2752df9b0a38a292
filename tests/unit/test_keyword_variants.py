"""Unit tests for keyword variant generation (plural toggle, ie/y)."""

from cuisine.application.services.keyword_variants import generate_variants


def test_singular_word_gets_plural() -> None:
    variants = generate_variants("recette")
    assert "recette" in variants
    assert "recettes" in variants


def test_plural_word_gets_singular() -> None:
    variants = generate_variants("recettes")
    assert "recettes" in variants
    assert "recette" in variants


def test_ie_ending_adds_y_form() -> None:
    assert generate_variants("bougie") == {"bougie", "bougies", "bougy"}


def test_y_ending_adds_ie_form() -> None:
    assert generate_variants("curry") == {"curry", "currys", "currie"}


def test_word_is_lowercased_and_accent_stripped() -> None:
    assert generate_variants("Crème") == {"creme", "cremes"}


def test_empty_word_has_no_variants() -> None:
    assert generate_variants("") == set()
    assert generate_variants("   ") == set()


def test_single_s_has_no_empty_singular() -> None:
    assert generate_variants("s") == {"s"}
