"""Unit tests for spell correction against known titles."""

from cuisine.application.services.spell_corrector import SpellCorrector

CORPUS = ["Tarte aux pommes", "Tarte Tatin"]


def test_corrects_to_closest_title_word() -> None:
    assert SpellCorrector(CORPUS).correct("tart") == "tarte"


def test_keeps_word_without_close_match() -> None:
    assert SpellCorrector(CORPUS).correct("xyzxyz") == "xyzxyz"


def test_exact_word_is_unchanged() -> None:
    assert SpellCorrector(CORPUS).correct("pommes") == "pommes"


def test_distance_two_is_accepted_and_three_rejected() -> None:
    corrector = SpellCorrector(["Quiche"])
    assert corrector.correct("quic") == "quiche"
    assert corrector.correct("qui") == "qui"


def test_max_distance_is_configurable() -> None:
    assert SpellCorrector(CORPUS, max_distance=0).correct("tart") == "tart"


def test_input_is_lowercased() -> None:
    assert SpellCorrector(CORPUS).correct("TATN") == "tatin"


def test_tie_keeps_first_word_in_corpus_order() -> None:
    corrector = SpellCorrector(["Pain", "Bain"])
    assert corrector.correct("xain") == "pain"


def test_empty_corpus_returns_word() -> None:
    assert SpellCorrector([]).correct("tarte") == "tarte"


def test_vocabulary_is_deduplicated_lowercase() -> None:
    assert SpellCorrector(CORPUS).vocabulary == ["tarte", "aux", "pommes", "tatin"]


def test_correct_query_corrects_each_token() -> None:
    corrector = SpellCorrector(CORPUS)
    assert corrector.correct_query("  Tart   pomes ") == "tarte pommes"
