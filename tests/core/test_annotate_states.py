# tests\core\test_annotate_states.py
import pytest

from geoharvest.adapters.persistence.csv_tables import CsvTableStore
from geoharvest.core.domain.exceptions import MissingColumnError, TableAccessError
from geoharvest.core.use_cases.annotate_states import AnnotateStates
from tests.fakes import read_csv, write_csv

HEADER = ["country_code", "state_code", "state_name"]


@pytest.fixture
def use_case(language_map):
    return AnnotateStates(table_store=CsvTableStore(), language_map=language_map)


def test_english_state_keeps_name_in_en_column(tmp_path, use_case):
    src = write_csv(tmp_path / "states.csv", HEADER, [["US", "US-CA", "California"]])
    out = tmp_path / "formula_states.csv"

    use_case.execute(str(src), str(out))

    assert read_csv(out) == [
        HEADER + ["state_name_br", "state_name_en"],
        ["US", "US-CA", "California", '=GOOGLETRANSLATE(C2;"en";"PT")', "California"],
    ]


def test_portuguese_state_keeps_name_in_br_column(tmp_path, use_case):
    src = write_csv(tmp_path / "states.csv", HEADER, [["BR", "BR-SP", "São Paulo"]])
    out = tmp_path / "formula_states.csv"

    use_case.execute(str(src), str(out))

    assert read_csv(out)[1] == ["BR", "BR-SP", "São Paulo", "São Paulo", '=GOOGLETRANSLATE(C2;"pt";"EN")']


def test_other_language_gets_two_formulas(tmp_path, use_case):
    src = write_csv(tmp_path / "states.csv", HEADER, [["AE", "AE-DU", "دبي"]])
    out = tmp_path / "formula_states.csv"

    use_case.execute(str(src), str(out))

    assert read_csv(out)[1][3:] == [
        '=GOOGLETRANSLATE(C2;"ar";"PT")',
        '=GOOGLETRANSLATE(C2;"ar";"EN")',
    ]


def test_skipped_rows_do_not_advance_row_counter(tmp_path, use_case):
    """Formulas reference the line they are written to, not the input line."""
    src = write_csv(
        tmp_path / "states.csv",
        HEADER,
        [
            ["US", "US-CA", "California"],
            ["XX", "XX-01", "Nowhere"],
            ["BR", "BR-SP", "São Paulo"],
            ["ZZ", "ZZ-02", "Elsewhere"],
            ["US", "US-TX", "Texas"],
        ],
    )
    out = tmp_path / "formula_states.csv"

    report = use_case.execute(str(src), str(out))

    rows = read_csv(out)
    assert [r[1] for r in rows[1:]] == ["US-CA", "BR-SP", "US-TX"]
    assert rows[1][3] == '=GOOGLETRANSLATE(C2;"en";"PT")'
    assert rows[2][4] == '=GOOGLETRANSLATE(C3;"pt";"EN")'
    assert rows[3][3] == '=GOOGLETRANSLATE(C4;"en";"PT")'

    assert report.rows_read == 5
    assert report.rows_written == 3
    assert report.rows_skipped == 2


def test_empty_input_writes_header_only(tmp_path, use_case):
    src = write_csv(tmp_path / "states.csv", HEADER, [])
    out = tmp_path / "formula_states.csv"

    report = use_case.execute(str(src), str(out))

    assert read_csv(out) == [HEADER + ["state_name_br", "state_name_en"]]
    assert report.rows_written == 0


def test_extra_columns_are_preserved_before_appended_ones(tmp_path, use_case):
    header = ["country_code", "state_code", "state_name", "population"]
    src = write_csv(tmp_path / "states.csv", header, [["US", "US-CA", "California", "39000000"]])
    out = tmp_path / "formula_states.csv"

    use_case.execute(str(src), str(out))

    rows = read_csv(out)
    assert rows[0] == header + ["state_name_br", "state_name_en"]
    assert rows[1][:4] == ["US", "US-CA", "California", "39000000"]


def test_formula_follows_name_column_position(tmp_path, use_case):
    header = ["state_name", "country_code", "state_code"]
    src = write_csv(tmp_path / "states.csv", header, [["California", "US", "US-CA"]])
    out = tmp_path / "formula_states.csv"

    use_case.execute(str(src), str(out))

    assert read_csv(out)[1][3] == '=GOOGLETRANSLATE(A2;"en";"PT")'


def test_custom_translate_function(tmp_path, language_map):
    use_case = AnnotateStates(CsvTableStore(), language_map, translate_function="TRADUZIR")
    src = write_csv(tmp_path / "states.csv", HEADER, [["US", "US-CA", "California"]])
    out = tmp_path / "formula_states.csv"

    use_case.execute(str(src), str(out))

    assert read_csv(out)[1][3] == '=TRADUZIR(C2;"en";"PT")'


def test_rerun_produces_identical_output(tmp_path, use_case):
    src = write_csv(
        tmp_path / "states.csv",
        HEADER,
        [["US", "US-CA", "California"], ["BR", "BR-RJ", "Rio de Janeiro"]],
    )
    first = tmp_path / "first.csv"
    second = tmp_path / "second.csv"

    use_case.execute(str(src), str(first))
    use_case.execute(str(src), str(second))

    assert first.read_bytes() == second.read_bytes()


def test_missing_required_column_is_fatal(tmp_path, use_case):
    src = write_csv(tmp_path / "states.csv", ["country_code", "state_name"], [["US", "California"]])
    out = tmp_path / "formula_states.csv"

    with pytest.raises(MissingColumnError) as exc:
        use_case.execute(str(src), str(out))

    assert exc.value.missing == ["state_code"]
    assert not out.exists()


def test_missing_input_file_is_fatal(tmp_path, use_case):
    with pytest.raises(TableAccessError):
        use_case.execute(str(tmp_path / "absent.csv"), str(tmp_path / "out.csv"))
