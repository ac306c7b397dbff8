"""Tabular form input parsed from delimited text.

A ``TableInput`` keeps the raw text the user typed and the result of parsing
it.  Parse failures are never raised; they become the field's validation
error so the form can be redisplayed with the message::

    table = TableInput("a\\tb\\nc\\td\\n")
    table.records              # [["a", "b"], ["c", "d"]]
    table.validate()           # Valid()

    table = TableInput("a\\tb\\nc\\n")
    table.validate()           # Invalid("CSV error: record 1 (line 2): found ...")

Records may be converted to a typed record class: a dataclass or
``NamedTuple`` whose field annotations are callables such as ``int``,
``float`` or ``str``.
"""

from __future__ import annotations

import csv
import dataclasses
import io
import typing
from dataclasses import dataclass
from typing import Any

from websummary.form.inputs import FormInput, Spreadsheet, TextArea
from websummary.form.validation import FieldValidationResult, Invalid, Valid
from websummary.form.widgets import SpreadsheetConfig, TextAreaConfig
from websummary.serialize import JsonValue

__all__ = [
    "CsvDialect",
    "CsvWithHeader",
    "TableInput",
    "TsvNoHeader",
]


@dataclass(frozen=True, slots=True)
class CsvDialect:
    """How the raw text is split into records.

    Attributes:
        delimiter:  Single-character field separator.
        has_header: Whether the first record names the columns.
    """

    delimiter: str = ","
    has_header: bool = False

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1:
            msg = f"Delimiter must be a single character, got {self.delimiter!r}"
            raise ValueError(msg)


TsvNoHeader = CsvDialect(delimiter="\t", has_header=False)
CsvWithHeader = CsvDialect(delimiter=",", has_header=True)


def _record_fields(record_type: type) -> list[tuple[str, Any]]:
    hints = typing.get_type_hints(record_type)
    if dataclasses.is_dataclass(record_type):
        names = [f.name for f in dataclasses.fields(record_type)]
    elif hasattr(record_type, "_fields"):
        names = list(record_type._fields)
    else:
        msg = f"Record type {record_type.__name__} must be a dataclass or NamedTuple"
        raise TypeError(msg)
    return [(name, hints.get(name, str)) for name in names]


class TableInput:
    """Delimited text plus its parsed records (or the parse error)."""

    def __init__(
        self,
        raw: str,
        record_type: type | None = None,
        reader: CsvDialect = TsvNoHeader,
    ) -> None:
        self.raw = raw
        self.record_type = record_type
        self.reader = reader
        self.header: list[str] | None = None
        self.rows: list[list[str]] = []
        self._records: list[Any] = []
        self.error: str | None = None
        try:
            self._parse()
        except (ValueError, csv.Error) as e:
            self.error = str(e)

    def __repr__(self) -> str:
        return f"TableInput({self.raw!r}, record_type={self.record_type!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TableInput):
            return NotImplemented
        return (self.raw, self.record_type, self.reader) == (
            other.raw,
            other.record_type,
            other.reader,
        )

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def _parse(self) -> None:
        lines = csv.reader(io.StringIO(self.raw), delimiter=self.reader.delimiter)
        fields = _record_fields(self.record_type) if self.record_type else None
        expected = len(fields) if fields is not None else None
        for line_num, row in enumerate(lines, start=1):
            if not row:
                continue
            if self.reader.has_header and self.header is None:
                self.header = row
                expected = len(row)
                continue
            if expected is None:
                expected = len(row)
            if len(row) != expected:
                msg = (
                    f"CSV error: record {len(self.rows)} (line {line_num}): "
                    f"found record with {len(row)} fields, but the previous "
                    f"record has {expected} fields"
                )
                raise ValueError(msg)
            self.rows.append(row)
        if fields is not None and self.record_type is not None:
            self._records = [
                self._convert(i, row, fields) for i, row in enumerate(self.rows)
            ]
        else:
            self._records = [list(row) for row in self.rows]

    def _convert(self, index: int, row: list[str], fields: list[tuple[str, Any]]) -> Any:
        if self.header is not None:
            by_name = dict(zip(self.header, row, strict=True))
            missing = [name for name, _ in fields if name not in by_name]
            if missing:
                msg = f"CSV deserialize error: record {index}: missing field `{missing[0]}`"
                raise ValueError(msg)
            cells = [by_name[name] for name, _ in fields]
        else:
            cells = row
        values = []
        for (name, convert), cell in zip(fields, cells, strict=True):
            try:
                values.append(convert(cell) if callable(convert) else cell)
            except (TypeError, ValueError) as e:
                msg = f"CSV deserialize error: record {index}: field `{name}`: {e}"
                raise ValueError(msg) from e
        return self.record_type(*values)  # type: ignore[misc]

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    @property
    def records(self) -> list[Any]:
        """Parsed records; empty when parsing failed."""
        return list(self._records)

    def inner(self) -> list[Any]:
        """Return the parsed records.

        Raises:
            ValueError: With the parser message if parsing failed.
        """
        if self.error is not None:
            raise ValueError(self.error)
        return self.records

    def validate(self) -> FieldValidationResult:
        return Valid() if self.error is None else Invalid(self.error)

    def to_json(self) -> JsonValue:
        return self.raw

    # ------------------------------------------------------------------
    # Form input
    # ------------------------------------------------------------------

    @classmethod
    def default_config(cls) -> TextAreaConfig:
        return TextAreaConfig()

    @classmethod
    def create_form_input(
        cls,
        config: TextAreaConfig | SpreadsheetConfig,
        name: str,
        value: TableInput | None,
    ) -> FormInput:
        if isinstance(config, SpreadsheetConfig):
            return FormInput(
                Spreadsheet(
                    name=name,
                    columns=list(config.columns),
                    value=value.rows if value is not None else None,
                )
            )
        return FormInput(
            TextArea(
                name=name,
                rows=config.rows,
                placeholder=config.placeholder,
                value=value.raw if value is not None else None,
            )
        )
