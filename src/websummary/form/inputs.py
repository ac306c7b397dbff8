"""Form widget payloads.

| Class          | Component      | FormInput tag  |
| -------------- | -------------- | -------------- |
| InputElement   | InputElement   | Input          |
| SingleSelect   | SingleSelect   | SingleSelect   |
| MultiSelect    | MultiSelect    | MultiSelect    |
| TextArea       | TextArea       | TextArea       |
| Spreadsheet    | Spreadsheet    | Spreadsheet    |
| InputFeedback  | InputFeedback  |                |

``FormInput`` wraps exactly one widget and serializes as the tagged pair
``{"type": tag, "content": widget}``, so the widget itself lives one level
down at ``key.content``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

from websummary import datakey
from websummary.components.catalog import ReactComponent, react_component
from websummary.render import render
from websummary.serialize import JsonValue, json_field, to_json

__all__ = [
    "FormInput",
    "InputElement",
    "InputFeedback",
    "InputType",
    "MultiSelect",
    "MultiSelectType",
    "SingleSelect",
    "SingleSelectType",
    "Spreadsheet",
    "TextArea",
]


class InputType(StrEnum):
    """Value of the ``type`` attribute of an ``<input>`` tag."""

    BUTTON = auto()
    CHECK_BOX = auto()
    FILE = auto()
    NUMBER = auto()
    RADIO = auto()
    RANGE = auto()
    TEXT = auto()


class SingleSelectType(StrEnum):
    RADIO = auto()
    DROPDOWN = auto()


class MultiSelectType(StrEnum):
    CHECKBOX = auto()
    SELECT = auto()


@react_component("InputFeedback")
@dataclass(slots=True)
class InputFeedback(ReactComponent):
    """Message shown under a form input: an error, a hint, or nothing."""

    error: str | None = None
    text: str | None = None


@react_component("InputElement")
@dataclass(slots=True)
class InputElement(ReactComponent):
    """A single ``<input>`` tag.  Numeric bounds are carried as text."""

    name: str
    kind: InputType = json_field(rename="type")
    value: str | None = None
    min: str | None = None
    max: str | None = None
    step: str | None = None
    placeholder: str | None = None
    required: bool = True


@react_component("SingleSelect")
@dataclass(slots=True)
class SingleSelect(ReactComponent):
    kind: SingleSelectType = json_field(rename="type")
    name: str
    options: list[str] = field(default_factory=list)
    selected: str | None = None
    required: bool | None = True


@react_component("MultiSelect")
@dataclass(slots=True)
class MultiSelect(ReactComponent):
    kind: MultiSelectType = json_field(rename="type")
    name: str
    options: list[str] = field(default_factory=list)
    selected: list[str] = field(default_factory=list)
    required: bool | None = True


@react_component("TextArea")
@dataclass(slots=True)
class TextArea(ReactComponent):
    name: str
    rows: int | None = json_field(skip_if_none=True, default=None)
    placeholder: str | None = None
    required: bool | None = True
    value: str | None = None


@react_component("Spreadsheet")
@dataclass(slots=True)
class Spreadsheet(ReactComponent):
    """An editable grid with a fixed set of named columns."""

    name: str
    columns: list[str]
    value: list[list[str]] | None = None
    required: bool | None = True


_TAGS: dict[type, str] = {
    InputElement: "Input",
    TextArea: "TextArea",
    MultiSelect: "MultiSelect",
    SingleSelect: "SingleSelect",
    Spreadsheet: "Spreadsheet",
}


@dataclass(slots=True)
class FormInput:
    """Tagged union over the input widgets.

    Raises:
        TypeError: If ``content`` is not one of the widget classes.
    """

    content: InputElement | TextArea | MultiSelect | SingleSelect | Spreadsheet

    def __post_init__(self) -> None:
        if type(self.content) not in _TAGS:
            msg = f"{type(self.content).__name__} is not a form input widget"
            raise TypeError(msg)

    @property
    def tag(self) -> str:
        return _TAGS[type(self.content)]

    def template(self, data_key: str | None) -> str:
        return render(self.content, datakey.join(data_key, datakey.Field("content")))

    def to_json(self) -> JsonValue:
        return {"type": self.tag, "content": to_json(self.content)}

    @classmethod
    def wrap(cls, widget: Any) -> FormInput:
        """Return ``widget`` unchanged if it already is a ``FormInput``."""
        return widget if isinstance(widget, FormInput) else cls(widget)
