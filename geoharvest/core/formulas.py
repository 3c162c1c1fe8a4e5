"""
geoharvest/core/formulas.py

Spreadsheet translation formulas.

The annotation passes never translate anything themselves. They write
formula strings such as::

    =GOOGLETRANSLATE(C2;"en";"PT")

that the spreadsheet engine evaluates once the CSV is opened. Formulas
reference the cell holding the original name on the *output* row, so the
row number must match the line the row is written to (header = row 1).
"""

from typing import Tuple

DEFAULT_TRANSLATE_FUNCTION = "GOOGLETRANSLATE"

# The header occupies spreadsheet row 1
FIRST_DATA_ROW = 2

# Source languages with a verbatim column
LANG_EN = "en"
LANG_PT = "pt"

# Target language codes as written in the formula
TARGET_PT = "PT"
TARGET_EN = "EN"


def column_letter(index: int) -> str:
    """
    Converts a 0-based column index to spreadsheet letters (0 -> A, 26 -> AA).
    """
    if index < 0:
        raise ValueError("column index must be non-negative")
    letters = ""
    n = index + 1
    while n:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def cell_ref(column_index: int, row_number: int) -> str:
    return f"{column_letter(column_index)}{row_number}"


def translate_formula(
    ref: str,
    source_lang: str,
    target_lang: str,
    function: str = DEFAULT_TRANSLATE_FUNCTION,
) -> str:
    return f'={function}({ref};"{source_lang}";"{target_lang}")'


def bilingual_names(
    name: str,
    ref: str,
    source_lang: str,
    function: str = DEFAULT_TRANSLATE_FUNCTION,
) -> Tuple[str, str]:
    """
    Returns the (Portuguese, English) cells for a name written in source_lang.

    | source_lang | br                    | en                    |
    |-------------|-----------------------|-----------------------|
    | en          | formula en -> PT      | name                  |
    | pt          | name                  | formula pt -> EN      |
    | other       | formula src -> PT     | formula src -> EN     |
    """
    lang = source_lang.strip().lower()

    if lang == LANG_EN:
        return translate_formula(ref, lang, TARGET_PT, function), name
    if lang == LANG_PT:
        return name, translate_formula(ref, lang, TARGET_EN, function)
    return (
        translate_formula(ref, lang, TARGET_PT, function),
        translate_formula(ref, lang, TARGET_EN, function),
    )
