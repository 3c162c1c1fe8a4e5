# geoharvest\core\use_cases\translation_annotator.py
from typing import Dict, List, Sequence, Tuple

import structlog

from geoharvest.core.domain.models import AnnotationReport, LanguageMap
from geoharvest.core.formulas import DEFAULT_TRANSLATE_FUNCTION, FIRST_DATA_ROW, cell_ref
from geoharvest.core.ports.table_store import ITableReader, ITableStore, ITableWriter
from geoharvest.shared.observability import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)


class TranslationAnnotator:
    """
    Shared machinery of the annotation passes.

    Reads a table, drops rows whose country has no source language, and
    writes every other row back with extra columns appended. Subclasses
    choose the name column the formulas point at and compute the extra cells.

    Row numbering: the first written data row is spreadsheet row 2 and the
    counter advances only when a row is written, so formulas always point
    at the row they live on.
    """

    span_name = "use_case.annotate"
    name_column: str = ""
    required_columns: Tuple[str, ...] = ()
    appended_columns: Tuple[str, ...] = ()

    def __init__(
        self,
        table_store: ITableStore,
        language_map: LanguageMap,
        translate_function: str = DEFAULT_TRANSLATE_FUNCTION,
    ):
        self.table_store = table_store
        self.language_map = language_map
        self.translate_function = translate_function
        self.missing_state_translations = 0

    def output_header(self, fieldnames: Sequence[str]) -> List[str]:
        return list(fieldnames) + list(self.appended_columns)

    def execute(self, input_path: str, output_path: str) -> AnnotationReport:
        with tracer.start_as_current_span(self.span_name) as span:
            span.set_attribute("app.input", str(input_path))
            span.set_attribute("app.output", str(output_path))

            with self.table_store.open_reader(input_path, self.required_columns) as reader:
                header = self.output_header(reader.fieldnames)
                with self.table_store.open_writer(output_path, header) as writer:
                    report = self.annotate(reader, writer)

            logger.info(
                "annotation_finished",
                input=str(input_path),
                output=str(output_path),
                **report.model_dump(mode="json"),
            )
            return report

    def annotate(self, reader: ITableReader, writer: ITableWriter) -> AnnotationReport:
        fieldnames = list(reader.fieldnames)
        name_index = fieldnames.index(self.name_column)
        self.missing_state_translations = 0

        row_number = FIRST_DATA_ROW
        rows_read = rows_written = rows_skipped = 0

        for line, row in enumerate(reader, start=2):
            rows_read += 1
            country_code = (row.get("country_code") or "").strip()
            source_lang = self.language_map.get(country_code)

            if not source_lang:
                rows_skipped += 1
                logger.warning(
                    "row_skipped_unknown_language",
                    table=reader.path,
                    line=line,
                    country_code=country_code,
                )
                continue

            ref = cell_ref(name_index, row_number)
            extra = self.annotate_row(row, ref, source_lang)
            writer.write_row([row.get(name) or "" for name in fieldnames] + extra)

            rows_written += 1
            row_number += 1

        return AnnotationReport(
            rows_read=rows_read,
            rows_written=rows_written,
            rows_skipped=rows_skipped,
            missing_state_translations=self.missing_state_translations,
        )

    def annotate_row(self, row: Dict[str, str], ref: str, source_lang: str) -> List[str]:
        raise NotImplementedError
