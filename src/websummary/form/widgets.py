"""Default widgets per field type.

Every form field type maps to a widget through a *config*: a small frozen
value that says which widget to build and how.  Each type has a default
config, and a form may override it per field (``configure_<field>``).

| Field type            | Default config                       | Widget            |
| --------------------- | ------------------------------------ | ----------------- |
| ``str``               | ``TextInputConfig()``                | text input        |
| ``int``               | ``IntInputConfig()`` (i64 bounds)    | number input      |
| ``float``             | ``FloatInputConfig()``               | number input      |
| ``Enum`` subclass     | ``SingleSelectType.RADIO``           | single select     |
| ``set``/``frozenset`` | ``MultiSelectType.CHECKBOX``         | multi select      |
| of an ``Enum``        |                                      |                   |
| ``TableInput``        | ``TextAreaConfig()``                 | text area         |

Other types participate by defining two classmethods::

    class Wavelength:
        @classmethod
        def default_config(cls) -> IntInputConfig: ...

        @classmethod
        def create_form_input(cls, config, name, value) -> FormInput: ...

or by being registered with ``register_form_input``.
"""

from __future__ import annotations

import typing
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from websummary.form.inputs import (
    FormInput,
    InputElement,
    InputType,
    MultiSelect,
    MultiSelectType,
    SingleSelect,
    SingleSelectType,
    TextArea,
)
from websummary.serialize import to_json

__all__ = [
    "I64_MAX",
    "I64_MIN",
    "FloatInputConfig",
    "FormInputFactory",
    "IntInputConfig",
    "SpreadsheetConfig",
    "TextAreaConfig",
    "TextInputConfig",
    "create_form_input",
    "default_config",
    "default_form_input",
    "enum_options",
    "enum_value",
    "register_form_input",
]

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1


# ---------------------------------------------------------------------------
# Configs
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TextInputConfig:
    placeholder: str | None = None


@dataclass(frozen=True, slots=True)
class TextAreaConfig:
    rows: int | None = None
    placeholder: str | None = None

    def __post_init__(self) -> None:
        if self.rows is not None and self.rows <= 0:
            msg = f"rows must be positive, got {self.rows}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class IntInputConfig:
    """Number input, or a range slider when ``slider`` is set."""

    min: int = I64_MIN
    max: int = I64_MAX
    step: int = 1
    slider: bool = False

    def __post_init__(self) -> None:
        if self.min > self.max:
            msg = f"min ({self.min}) must not exceed max ({self.max})"
            raise ValueError(msg)
        if self.step <= 0:
            msg = f"step must be positive, got {self.step}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class FloatInputConfig:
    min: float | None = None
    max: float | None = None
    step: str = "any"
    placeholder: str | None = None

    def __post_init__(self) -> None:
        if self.min is not None and self.max is not None and self.min > self.max:
            msg = f"min ({self.min}) must not exceed max ({self.max})"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class SpreadsheetConfig:
    columns: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.columns:
            msg = "SpreadsheetConfig requires at least one column"
            raise ValueError(msg)


# ---------------------------------------------------------------------------
# Builtin factories
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FormInputFactory:
    """How to build the widget of one field type."""

    create: Callable[[Any, str, Any], FormInput]
    default_config: Callable[[], Any]


def _str_input(
    config: TextInputConfig | TextAreaConfig, name: str, value: str | None
) -> FormInput:
    if isinstance(config, TextAreaConfig):
        return FormInput(
            TextArea(
                name=name,
                rows=config.rows,
                placeholder=config.placeholder,
                required=True,
                value=value,
            )
        )
    return FormInput(
        InputElement(
            name=name,
            kind=InputType.TEXT,
            value=value,
            placeholder=config.placeholder,
            required=True,
        )
    )


def _int_input(config: IntInputConfig, name: str, value: int | None) -> FormInput:
    return FormInput(
        InputElement(
            name=name,
            kind=InputType.RANGE if config.slider else InputType.NUMBER,
            value=str(value) if value is not None else None,
            min=str(config.min),
            max=str(config.max),
            step=str(config.step),
        )
    )


def _float_input(config: FloatInputConfig, name: str, value: float | None) -> FormInput:
    return FormInput(
        InputElement(
            name=name,
            kind=InputType.NUMBER,
            value=str(value) if value is not None else None,
            min=str(config.min) if config.min is not None else None,
            max=str(config.max) if config.max is not None else None,
            step=config.step,
            placeholder=config.placeholder,
        )
    )


_REGISTRY: dict[type, FormInputFactory] = {
    str: FormInputFactory(_str_input, TextInputConfig),
    int: FormInputFactory(_int_input, IntInputConfig),
    float: FormInputFactory(_float_input, FloatInputConfig),
}


def register_form_input(
    tp: type,
    *,
    create: Callable[[Any, str, Any], FormInput],
    default_config: Callable[[], Any],
) -> None:
    """Register (or replace) the widget factory of ``tp``."""
    _REGISTRY[tp] = FormInputFactory(create, default_config)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


def enum_value(member: Enum) -> str:
    """Option string of an enum member: its serialized value as text."""
    return str(to_json(member))


def enum_options(enum_type: type[Enum]) -> list[str]:
    return [enum_value(member) for member in enum_type]


def _set_element_type(tp: Any) -> type[Enum] | None:
    if typing.get_origin(tp) not in (set, frozenset):
        return None
    (element,) = typing.get_args(tp) or (None,)
    if isinstance(element, type) and issubclass(element, Enum):
        return element
    return None


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def _factory(tp: Any) -> FormInputFactory:
    if isinstance(tp, type) and tp in _REGISTRY:
        return _REGISTRY[tp]

    if isinstance(tp, type) and issubclass(tp, Enum):
        enum_type = tp

        def create_single(config: SingleSelectType, name: str, value: Any) -> FormInput:
            return FormInput(
                SingleSelect(
                    kind=SingleSelectType(config),
                    name=name,
                    options=enum_options(enum_type),
                    selected=enum_value(value) if value is not None else None,
                )
            )

        return FormInputFactory(create_single, lambda: SingleSelectType.RADIO)

    element_type = _set_element_type(tp)
    if element_type is not None:

        def create_multi(config: MultiSelectType, name: str, value: Any) -> FormInput:
            selected = [enum_value(v) for v in value or ()]
            # Options order is deterministic; selection follows it.
            options = enum_options(element_type)
            return FormInput(
                MultiSelect(
                    kind=MultiSelectType(config),
                    name=name,
                    options=options,
                    selected=[o for o in options if o in selected],
                )
            )

        return FormInputFactory(create_multi, lambda: MultiSelectType.CHECKBOX)

    create = getattr(tp, "create_form_input", None)
    make_default = getattr(tp, "default_config", None)
    if callable(create) and callable(make_default):
        return FormInputFactory(create, make_default)

    msg = f"No form input is known for type {getattr(tp, '__name__', tp)!r}"
    raise TypeError(msg)


def default_config(tp: Any) -> Any:
    """Default widget config of the field type ``tp``.

    Raises:
        TypeError: If ``tp`` has no form input.
    """
    return _factory(tp).default_config()


def create_form_input(tp: Any, config: Any, name: str, value: Any) -> FormInput:
    """Build the ``FormInput`` of a field of type ``tp``.

    Args:
        tp:     Field type (a class or a ``set[Enum]`` alias).
        config: Widget config, usually ``default_config(tp)``.
        name:   Form field name.
        value:  Current value, or ``None`` for an empty form.

    Raises:
        TypeError: If ``tp`` has no form input.
    """
    return FormInput.wrap(_factory(tp).create(config, name, value))


def default_form_input(tp: Any, name: str, value: Any) -> FormInput:
    return create_form_input(tp, default_config(tp), name, value)
