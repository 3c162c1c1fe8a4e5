# geoharvest\core\use_cases\annotate_cities.py
from typing import Dict, List, Optional, Set

import structlog

from geoharvest.core.domain.models import (
    CITY_TRANSLATION_COLUMNS,
    STATE_CITY_COLUMNS,
    TRANSLATED_STATE_COLUMNS,
    AnnotationReport,
    LanguageMap,
    LocalizedName,
    StateTranslationIndex,
)
from geoharvest.core.formulas import DEFAULT_TRANSLATE_FUNCTION, bilingual_names
from geoharvest.core.ports.table_store import ITableReader, ITableStore, ITableWriter
from geoharvest.core.use_cases.translation_annotator import TranslationAnnotator

logger = structlog.get_logger()


def build_state_translation_index(reader: ITableReader) -> StateTranslationIndex:
    """
    Indexes a finalized translated-states table by state name.

    Columns are addressed by header, so their order does not matter.
    Rows without a state name are ignored; a repeated name keeps its last row.
    """
    index: StateTranslationIndex = {}
    for row in reader:
        name = row.get("state_name") or ""
        if not name:
            continue
        index[name] = LocalizedName(
            br=row.get("state_name_br") or "",
            en=row.get("state_name_en") or "",
        )
    return index


class AnnotateCities(TranslationAnnotator):
    """
    Use Case: Adds localized state names and city formulas to a states+cities table.

    Steps:
    1. Build the StateTranslationIndex from the finalized states table.
    2. Stream the states+cities table, joining each row on state_name.
    3. Apply the same language decision as AnnotateStates to city_name.

    A state missing from the index leaves both localized state cells empty;
    the row itself is still written.
    """

    span_name = "use_case.annotate_cities"
    name_column = "city_name"
    required_columns = STATE_CITY_COLUMNS
    appended_columns = CITY_TRANSLATION_COLUMNS

    def __init__(
        self,
        table_store: ITableStore,
        language_map: LanguageMap,
        translate_function: str = DEFAULT_TRANSLATE_FUNCTION,
    ):
        super().__init__(table_store, language_map, translate_function)
        self.state_index: StateTranslationIndex = {}
        self._reported_missing: Set[str] = set()

    def load_state_index(self, translated_states_path: str) -> StateTranslationIndex:
        with self.table_store.open_reader(translated_states_path, TRANSLATED_STATE_COLUMNS) as reader:
            self.state_index = build_state_translation_index(reader)
        logger.info(
            "state_translation_index_built",
            table=str(translated_states_path),
            states=len(self.state_index),
        )
        return self.state_index

    def execute(
        self,
        input_path: str,
        output_path: str,
        translated_states_path: Optional[str] = None,
    ) -> AnnotationReport:
        if translated_states_path is not None:
            self.load_state_index(translated_states_path)
        return super().execute(input_path, output_path)

    def annotate(self, reader: ITableReader, writer: ITableWriter) -> AnnotationReport:
        self._reported_missing = set()
        return super().annotate(reader, writer)

    def annotate_row(self, row: Dict[str, str], ref: str, source_lang: str) -> List[str]:
        state_name = row.get("state_name") or ""
        localized = self.state_index.get(state_name)

        if localized is None:
            self.missing_state_translations += 1
            if state_name not in self._reported_missing:
                self._reported_missing.add(state_name)
                logger.warning("state_translation_missing", state_name=state_name)
            localized = LocalizedName()

        city_br, city_en = bilingual_names(
            row.get("city_name") or "", ref, source_lang, self.translate_function
        )
        return [localized.br, localized.en, city_br, city_en]
