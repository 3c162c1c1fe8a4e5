# geoharvest\core\use_cases\annotate_states.py
from typing import Dict, List

from geoharvest.core.domain.models import STATE_COLUMNS, STATE_TRANSLATION_COLUMNS
from geoharvest.core.formulas import bilingual_names
from geoharvest.core.use_cases.translation_annotator import TranslationAnnotator


class AnnotateStates(TranslationAnnotator):
    """
    Use Case: Adds state_name_br / state_name_en to a states table.

    The country's language decides which side is verbatim:
    English states keep their name in state_name_en, Portuguese states keep
    it in state_name_br, and every other language gets two formulas.
    """

    span_name = "use_case.annotate_states"
    name_column = "state_name"
    required_columns = STATE_COLUMNS
    appended_columns = STATE_TRANSLATION_COLUMNS

    def annotate_row(self, row: Dict[str, str], ref: str, source_lang: str) -> List[str]:
        br, en = bilingual_names(row.get("state_name") or "", ref, source_lang, self.translate_function)
        return [br, en]
