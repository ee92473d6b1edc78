"""CSV parsing and question set assembly for the admin import path.

An import is four files: ``meta.csv``, ``sections.csv``, ``questions.csv``
and ``options.csv``. Every problem is reported as a ``CsvError`` naming the
file, the 1-based row (0 for file-level problems) and, where it applies, the
column.
"""

from __future__ import annotations

import csv
import io
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any

from gutcheck_content.content.validation import OPTION_VALUES, QUESTION_SET_VERSION, validate_question_set

META_FILE = "meta.csv"
SECTIONS_FILE = "sections.csv"
QUESTIONS_FILE = "questions.csv"
OPTIONS_FILE = "options.csv"

META_HEADERS = ["key", "value"]
SECTION_HEADERS = ["section_id", "title", "order"]
QUESTION_HEADERS = ["question_id", "section_id", "text", "order"]
OPTION_HEADERS = ["question_id", "option_id", "label", "value"]

DOCUMENT_FILE = "question_set.json"


@dataclass(frozen=True)
class CsvError:
    file: str
    row: int
    message: str
    column: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"file": self.file, "row": self.row, "message": self.message}
        if self.column is not None:
            data["column"] = self.column
        return data

    def __str__(self) -> str:
        where = f"{self.file} row {self.row}"
        if self.column:
            where += f" column {self.column}"
        return f"{where}: {self.message}"


@dataclass(frozen=True)
class ParsedRow:
    row_number: int
    values: dict[str, str]

    def get(self, column: str) -> str:
        return self.values.get(column, "")


@dataclass
class BuildResult:
    document: dict[str, Any] | None = None
    errors: list[CsvError] = field(default_factory=list)
    assessment_version: str | None = None
    locale: str | None = None
    notes: str | None = None

    @property
    def ok(self) -> bool:
        return self.document is not None and not self.errors


def parse_csv(content: str, filename: str, expected_headers: list[str]) -> tuple[list[ParsedRow], list[CsvError]]:
    """Parse CSV text, checking the header row and each row's column count.

    Blank lines are skipped and do not count towards row numbers. Values
    are stripped. Quoted fields may contain commas; ``""`` is a literal quote.
    """
    records = [r for r in csv.reader(io.StringIO(content.lstrip("\ufeff"))) if any(cell.strip() for cell in r)]
    if not records:
        return [], [CsvError(filename, 0, "CSV file is empty")]

    headers = [h.strip() for h in records[0]]
    if len(headers) != len(expected_headers):
        return [], [CsvError(filename, 1, f"Expected {len(expected_headers)} columns, got {len(headers)}")]
    for expected, actual in zip(expected_headers, headers):
        if expected != actual:
            message = f'Header mismatch: expected "{expected}", got "{actual}"'
            return [], [CsvError(filename, 1, message, column=expected)]

    rows: list[ParsedRow] = []
    errors: list[CsvError] = []
    for index, record in enumerate(records[1:], start=2):
        if len(record) != len(headers):
            errors.append(CsvError(filename, index, f"Row has {len(record)} columns, expected {len(headers)}"))
            continue
        rows.append(ParsedRow(index, {h: v.strip() for h, v in zip(headers, record)}))
    return rows, errors


def _parse_order(value: str) -> float | None:
    try:
        return float(value)
    except ValueError:
        return None


def _meta_row(rows: list[ParsedRow], key: str) -> int:
    for row in rows:
        if row.get("key") == key:
            return row.row_number
    return rows[0].row_number


def build_question_set_from_csv(
    meta_rows: list[ParsedRow],
    section_rows: list[ParsedRow],
    question_rows: list[ParsedRow],
    option_rows: list[ParsedRow],
) -> BuildResult:
    """Assemble a v2 question set document from parsed CSV rows.

    Cross-file references are checked before assembly. The assembled
    document is then run through ``validate_question_set``; any problems
    it finds are reported against ``question_set.json``.
    """
    result = BuildResult()
    errors = result.errors

    if not meta_rows:
        errors.append(CsvError(META_FILE, 0, f"{META_FILE} must have at least one data row"))
        return result

    meta = {row.get("key"): row.get("value") for row in meta_rows if row.get("key")}
    version = meta.get("version", "")
    assessment_type = meta.get("assessmentType", "")
    assessment_version = meta.get("assessmentVersion", "")

    if version != QUESTION_SET_VERSION:
        errors.append(
            CsvError(
                META_FILE,
                _meta_row(meta_rows, "version"),
                f'version must be "{QUESTION_SET_VERSION}", got "{version or "empty"}"',
                column="value",
            )
        )
    if not assessment_type:
        errors.append(
            CsvError(META_FILE, _meta_row(meta_rows, "assessmentType"), "assessmentType is required", column="value")
        )
    if not assessment_version:
        errors.append(
            CsvError(
                META_FILE,
                _meta_row(meta_rows, "assessmentVersion"),
                "assessmentVersion is required",
                column="value",
            )
        )
    if errors:
        return result

    result.assessment_version = assessment_version
    result.locale = meta.get("locale") or None
    result.notes = meta.get("notes") or None

    # sections, ordered
    sections: list[tuple[float, ParsedRow]] = []
    for row in section_rows:
        order = _parse_order(row.get("order"))
        if order is None:
            errors.append(
                CsvError(SECTIONS_FILE, row.row_number, f'order must be numeric, got "{row.get("order")}"', "order")
            )
            continue
        sections.append((order, row))
    sections.sort(key=lambda item: item[0])

    section_ids: set[str] = set()
    for _, row in sections:
        section_id = row.get("section_id")
        if section_id in section_ids:
            errors.append(
                CsvError(SECTIONS_FILE, row.row_number, f'Duplicate section_id: "{section_id}"', "section_id")
            )
        section_ids.add(section_id)

    # questions, grouped by section and ordered within it
    questions_by_section: dict[str, list[tuple[float, ParsedRow]]] = defaultdict(list)
    question_text: dict[str, str] = {}
    question_row: dict[str, int] = {}
    for row in question_rows:
        question_id = row.get("question_id")
        section_id = row.get("section_id")
        order = _parse_order(row.get("order"))
        if order is None:
            errors.append(
                CsvError(QUESTIONS_FILE, row.row_number, f'order must be numeric, got "{row.get("order")}"', "order")
            )
            continue
        if section_id not in section_ids:
            errors.append(
                CsvError(
                    QUESTIONS_FILE,
                    row.row_number,
                    f'section_id "{section_id}" does not exist in {SECTIONS_FILE}',
                    "section_id",
                )
            )
            continue
        if question_id in question_text:
            errors.append(
                CsvError(QUESTIONS_FILE, row.row_number, f'Duplicate question_id: "{question_id}"', "question_id")
            )
            continue
        question_text[question_id] = row.get("text")
        question_row[question_id] = row.row_number
        questions_by_section[section_id].append((order, row))

    for entries in questions_by_section.values():
        entries.sort(key=lambda item: item[0])

    # options, grouped by question
    options_by_question: dict[str, list[tuple[int, ParsedRow]]] = defaultdict(list)
    for row in option_rows:
        question_id = row.get("question_id")
        raw_value = row.get("value")
        try:
            value = int(raw_value)
        except ValueError:
            value = None
        if value not in OPTION_VALUES:
            errors.append(
                CsvError(OPTIONS_FILE, row.row_number, f'value must be one of {{0,1,2,3}}, got "{raw_value}"', "value")
            )
            continue
        if question_id not in question_text:
            errors.append(
                CsvError(
                    OPTIONS_FILE,
                    row.row_number,
                    f'question_id "{question_id}" does not exist in {QUESTIONS_FILE}',
                    "question_id",
                )
            )
            continue
        options_by_question[question_id].append((value, row))

    for question_id, row_number in question_row.items():
        options = options_by_question.get(question_id, [])
        if not options:
            errors.append(
                CsvError(
                    QUESTIONS_FILE,
                    row_number,
                    f'Question "{question_id}" must have exactly {len(OPTION_VALUES)} options, got 0',
                    "question_id",
                )
            )
            continue
        _check_options(question_id, options, errors)

    if errors:
        return result

    document = {
        "version": QUESTION_SET_VERSION,
        "assessmentType": assessment_type,
        "sections": [
            {
                "id": row.get("section_id"),
                "title": row.get("title"),
                "questionIds": [q.get("question_id") for _, q in questions_by_section.get(row.get("section_id"), [])],
            }
            for _, row in sections
        ],
        "questions": [
            {
                "id": question_id,
                "text": text,
                "options": [
                    {"id": opt.get("option_id"), "label": opt.get("label"), "value": value}
                    for value, opt in sorted(options_by_question[question_id], key=lambda item: item[0])
                ],
            }
            for question_id, text in question_text.items()
        ],
    }

    validation = validate_question_set(document, assessment_type=assessment_type)
    if not validation.ok:
        errors.extend(CsvError(DOCUMENT_FILE, 0, message) for message in validation.errors)
        return result

    result.document = document
    return result


def _check_options(question_id: str, options: list[tuple[int, ParsedRow]], errors: list[CsvError]) -> None:
    first_row = options[0][1].row_number
    if len(options) != len(OPTION_VALUES):
        errors.append(
            CsvError(
                OPTIONS_FILE,
                first_row,
                f'Question "{question_id}" must have exactly {len(OPTION_VALUES)} options, got {len(options)}',
                "question_id",
            )
        )

    option_ids: set[str] = set()
    for _, row in options:
        option_id = row.get("option_id")
        if option_id in option_ids:
            errors.append(
                CsvError(
                    OPTIONS_FILE,
                    row.row_number,
                    f'Duplicate option_id "{option_id}" within question "{question_id}"',
                    "option_id",
                )
            )
        option_ids.add(option_id)

    for expected in OPTION_VALUES:
        matching = [row for value, row in options if value == expected]
        if not matching:
            errors.append(
                CsvError(
                    OPTIONS_FILE,
                    first_row,
                    f'Question "{question_id}" is missing option with value {expected}',
                    "value",
                )
            )
        elif len(matching) > 1:
            errors.append(
                CsvError(
                    OPTIONS_FILE,
                    matching[1].row_number,
                    f'Question "{question_id}" has duplicate value {expected}',
                    "value",
                )
            )
