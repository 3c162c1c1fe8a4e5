# tests\core\test_formulas.py
import pytest

from geoharvest.core.formulas import (
    FIRST_DATA_ROW,
    bilingual_names,
    cell_ref,
    column_letter,
    translate_formula,
)


@pytest.mark.parametrize(
    "index, letters",
    [(0, "A"), (2, "C"), (3, "D"), (25, "Z"), (26, "AA"), (27, "AB"), (701, "ZZ"), (702, "AAA")],
)
def test_column_letter(index, letters):
    assert column_letter(index) == letters


def test_column_letter_rejects_negative_index():
    with pytest.raises(ValueError):
        column_letter(-1)


def test_cell_ref_points_at_first_data_row():
    assert cell_ref(2, FIRST_DATA_ROW) == "C2"


def test_translate_formula_syntax():
    assert translate_formula("C2", "en", "PT") == '=GOOGLETRANSLATE(C2;"en";"PT")'


def test_translate_formula_custom_function():
    assert translate_formula("D7", "ko", "EN", function="TRANSLATE") == '=TRANSLATE(D7;"ko";"EN")'


class TestBilingualNames:
    def test_english_source_keeps_english_verbatim(self):
        br, en = bilingual_names("California", "C2", "en")

        assert br == '=GOOGLETRANSLATE(C2;"en";"PT")'
        assert en == "California"

    def test_portuguese_source_keeps_portuguese_verbatim(self):
        br, en = bilingual_names("São Paulo", "C3", "pt")

        assert br == "São Paulo"
        assert en == '=GOOGLETRANSLATE(C3;"pt";"EN")'

    def test_other_source_gets_two_formulas(self):
        br, en = bilingual_names("Zulia", "C4", "es")

        assert br == '=GOOGLETRANSLATE(C4;"es";"PT")'
        assert en == '=GOOGLETRANSLATE(C4;"es";"EN")'

    def test_source_language_is_normalized(self):
        br, en = bilingual_names("Texas", "C5", " EN ")

        assert br == '=GOOGLETRANSLATE(C5;"en";"PT")'
        assert en == "Texas"
