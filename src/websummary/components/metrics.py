"""Metric, title and table payloads.

| Class             | Component       |
| ----------------- | --------------- |
| HeroMetric        | Metric          |
| TitleWithHelp     | HeaderWithHelp  |
| TitleWithTermDesc | DynamicHelptext |
| GenericTable      | Table           |
| TableMetric       | TableMetric     |
"""

from __future__ import annotations

import csv
import html
import io
from dataclasses import dataclass, field
from enum import StrEnum, auto
from pathlib import Path
from typing import Any

from websummary.components.catalog import ReactComponent, react_component
from websummary.serialize import JsonValue, json_field

__all__ = [
    "GenericTable",
    "HeroMetric",
    "LinkedText",
    "TableMetric",
    "TableRow",
    "TermDesc",
    "Threshold",
    "Title",
    "TitleWithHelp",
    "TitleWithTermDesc",
    "WsNavBar",
]


class Threshold(StrEnum):
    """Display colour of a hero metric: green, orange or red."""

    PASS = auto()
    WARN = auto()
    ERROR = auto()


@dataclass(slots=True)
class WsNavBar:
    """Navigation bar and page header.

    Attributes:
        pipeline:    Header shown after the logo.
        id:          Page title is ``{id} - {description}``.
        description: Page title is ``{id} - {description}``.
    """

    pipeline: str
    id: str
    description: str


@react_component("Metric")
@dataclass(slots=True)
class HeroMetric(ReactComponent):
    """A statistic worth highlighting.

    ``name`` and ``metric`` accept anything printable and are stored as text,
    so ``HeroMetric("Number of cells", "3,487")`` and
    ``HeroMetric("Chemistry", chemistry_enum)`` both work.
    """

    name: Any
    metric: Any
    threshold: Threshold | None = None

    def __post_init__(self) -> None:
        self.name = str(self.name)
        self.metric = str(self.metric)


@react_component("HeaderWithHelp")
@dataclass(frozen=True, slots=True)
class TitleWithHelp(ReactComponent):
    """A heading with a collapsible help snippet (empty help shows none)."""

    title: str
    help: str = json_field(rename="helpText", default="")

    @classmethod
    def from_text(cls, title: str) -> TitleWithHelp:
        return cls(title=title)


@dataclass(frozen=True, slots=True)
class TermDesc:
    """A term (shown in bold) and its description paragraphs.

    Serializes as the pair ``[term, [desc, ...]]``.
    """

    term: str
    descriptions: tuple[str, ...]

    @classmethod
    def with_one_desc(cls, term: Any, desc: Any) -> TermDesc:
        return cls(str(term), (str(desc),))

    def to_json(self) -> JsonValue:
        return [self.term, list(self.descriptions)]


@react_component("DynamicHelptext")
@dataclass(frozen=True, slots=True)
class TitleWithTermDesc(ReactComponent):
    """A heading whose help is a list of terms and descriptions."""

    title: str
    data: tuple[TermDesc, ...] = ()


Title = TitleWithHelp | TitleWithTermDesc


@dataclass(slots=True)
class TableRow:
    """One table row; serializes as a plain list of cell strings."""

    cells: list[str]

    @classmethod
    def two_col(cls, c1: Any, c2: Any) -> TableRow:
        return cls([str(c1), str(c2)])

    def to_json(self) -> JsonValue:
        return list(self.cells)


@react_component("Table")
@dataclass(slots=True)
class GenericTable(ReactComponent):
    """A table with an optional header row."""

    rows: list[TableRow]
    header: list[str] | None = json_field(skip_if_none=True, default=None)

    @classmethod
    def from_rows(
        cls, rows: list[list[str]], header: list[str] | None = None
    ) -> GenericTable:
        return cls(rows=[TableRow(list(r)) for r in rows], header=header)

    @classmethod
    def from_columns(
        cls, columns: list[list[str]], header: list[str] | None = None
    ) -> GenericTable:
        """Build a table from columns; short columns are padded with ``""``.

        Raises:
            ValueError: If ``columns`` is empty.
        """
        if not columns:
            msg = "from_columns requires at least one column"
            raise ValueError(msg)
        num_rows = max(len(c) for c in columns)
        rows = [[""] * len(columns) for _ in range(num_rows)]
        for col_num, column in enumerate(columns):
            for row_num, value in enumerate(column):
                rows[row_num][col_num] = value
        return cls.from_rows(rows, header)

    @classmethod
    def from_csv_text(cls, text: str, has_headers: bool) -> GenericTable:
        """Build a table from comma-separated text.

        Raises:
            csv.Error: If the text is not valid CSV.
        """
        records = [row for row in csv.reader(io.StringIO(text)) if row]
        if has_headers and records:
            return cls.from_rows(records[1:], header=records[0])
        return cls.from_rows(records)

    @classmethod
    def from_csv_file(cls, path: str | Path, has_headers: bool) -> GenericTable:
        return cls.from_csv_text(Path(path).read_text(encoding="utf-8"), has_headers)


@react_component("TableMetric")
@dataclass(slots=True)
class TableMetric(ReactComponent):
    """Two-column, headerless table of ``(metric name, metric value)`` rows."""

    rows: list[tuple[str, str]] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class LinkedText:
    """A hyperlink rendered inline; it has no JSON of its own."""

    link: str
    text: str

    def html(self) -> str:
        return f'<a href="{html.escape(self.link)}">{html.escape(self.text)}</a>'

    def template(self, data_key: str | None) -> str:
        return self.html()

    def to_json(self) -> JsonValue:
        return None
