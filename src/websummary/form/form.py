"""Form assembly.

A form is described by a dataclass; each field becomes one form element made
of a title, an input widget chosen from the field's type, and a feedback
slot::

    class Scaling(StrEnum):
        LOG = "Log"
        LINEAR = "Linear"

    @html_form(method=FormMethod.POST)
    @dataclass
    class MyForm:
        analysis_id: int
        metric: str = form_field(doc="Metric\\n\\nEnter a metric")
        scaling: Scaling = Scaling.LOG

        def validate_analysis_id(self, value: int) -> FieldValidationResult:
            return Valid() if value >= 10000 else Invalid("Too small an analysis id")

    MyForm.form()                                   # empty form
    MyForm(1000, "filtered_bcs").validate().inner() # filled, with feedback

Per-field hooks looked up on the decorated class:

- ``validate_<field>(self, value)``: replaces the type's own ``validate()``
- ``configure_<field>()``: returns the widget config for the field (a
  classmethod or staticmethod); the type's default config otherwise

Field types are read with ``typing.get_type_hints``, so the types a form
refers to must be importable from the module that defines it.
"""

from __future__ import annotations

import dataclasses
import logging
import typing
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any, TypeVar

from cachetools import LRUCache, cached

from websummary import datakey
from websummary.components.metrics import Title
from websummary.form.inputs import FormInput, InputFeedback
from websummary.form.validation import (
    FieldValidationResult,
    Invalid,
    Valid,
    validate_value,
)
from websummary.form.widgets import create_form_input, default_config
from websummary.layout.static import DOC, html_field, html_template, title_from_doc
from websummary.serialize import is_skipped

__all__ = [
    "Form",
    "FormConfig",
    "FormElement",
    "FormMethod",
    "FormValidationResult",
    "form_field",
    "html_form",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FormMethod(StrEnum):
    GET = auto()
    POST = auto()


@dataclass(frozen=True, slots=True)
class FormConfig:
    url: str = ""
    method: FormMethod = FormMethod.GET


@html_template
@dataclass(slots=True)
class FormElement:
    """Title, input widget and feedback of one form field."""

    title: Title
    input: FormInput
    feedback: InputFeedback = field(default_factory=InputFeedback)

    def update(self, validation: FieldValidationResult) -> None:
        """Surface an ``Invalid`` result's message in the feedback slot."""
        if isinstance(validation, Invalid):
            self.feedback.error = validation.error


@dataclass(slots=True)
class Form:
    """A submittable form.

    Renders as a ``FormWrapper`` component keyed at ``key.config`` that wraps
    its elements, element ``i`` keyed ``key.elements[i]``.
    """

    config: FormConfig
    elements: list[FormElement] = field(default_factory=list)

    def template(self, data_key: str | None) -> str:
        elements_key = datakey.join(data_key, datakey.Field("elements"))
        children = "\n".join(
            element.template(datakey.join(elements_key, datakey.Index(i)))
            for i, element in enumerate(self.elements)
        )
        config_key = datakey.join(data_key, datakey.Field("config"))
        return (
            f'<div data-key="{config_key}" data-component="FormWrapper">\n'
            f"{children}\n</div>"
        )


@dataclass(frozen=True, slots=True)
class FormValidationResult:
    """The populated form and whether every field validated."""

    form: Form
    is_valid: bool

    def inner(self) -> Form:
        """The populated form, valid or not."""
        return self.form


def form_field(*, doc: str | None = None, **kwargs: Any) -> Any:
    """Dataclass field whose ``doc`` text becomes the form element title."""
    return html_field(doc=doc, **kwargs)


@dataclass(frozen=True, slots=True)
class _FormField:
    name: str
    tp: Any
    title: Title


@cached(cache=LRUCache(maxsize=256))
def _form_plan(cls: type) -> tuple[_FormField, ...]:
    hints = typing.get_type_hints(cls)
    return tuple(
        _FormField(f.name, hints[f.name], title_from_doc(f.name, f.metadata.get(DOC)))
        for f in dataclasses.fields(cls)
        if not is_skipped(f)
    )


def _field_config(cls: type, planned: _FormField) -> Any:
    configure = getattr(cls, f"configure_{planned.name}", None)
    if callable(configure):
        return configure()
    return default_config(planned.tp)


def _into_html_form(cls: type, value: Any | None) -> Form:
    elements = [
        FormElement(
            title=planned.title,
            input=create_form_input(
                planned.tp,
                _field_config(cls, planned),
                planned.name,
                getattr(value, planned.name) if value is not None else None,
            ),
        )
        for planned in _form_plan(cls)
    ]
    return Form(config=cls.__form_config__, elements=elements)  # type: ignore[attr-defined]


def html_form(
    cls: type[T] | None = None,
    *,
    method: FormMethod | str = FormMethod.GET,
    url: str = "",
) -> Any:
    """Class decorator turning a dataclass into a form description.

    Usable bare (``@html_form``) or with arguments
    (``@html_form(method="post", url="/submit")``).  Adds:

    - ``form()`` (classmethod): the empty form
    - ``filled_form_pre_validation()``: the form filled with this instance
    - ``field_validations()``: one ``Valid``/``Invalid`` per field
    - ``validate()``: the filled form with feedback, and overall validity

    Raises:
        TypeError: If the decorated class is not a dataclass.
    """
    config = FormConfig(url=url, method=FormMethod(method))

    def wrap(cls: type[T]) -> type[T]:
        if not dataclasses.is_dataclass(cls):
            msg = f"html_form requires a dataclass, got {cls.__name__}"
            raise TypeError(msg)
        cls.__form_config__ = config  # type: ignore[attr-defined]
        cls.form = classmethod(_form)  # type: ignore[attr-defined]
        cls.filled_form_pre_validation = _filled_form_pre_validation  # type: ignore[attr-defined]
        cls.field_validations = _field_validations  # type: ignore[attr-defined]
        cls.validate = _validate  # type: ignore[attr-defined]
        return cls

    if cls is not None:
        return wrap(cls)
    return wrap


def _form(cls: type) -> Form:
    return _into_html_form(cls, None)


def _filled_form_pre_validation(self: Any) -> Form:
    return _into_html_form(type(self), self)


def _field_validations(self: Any) -> list[FieldValidationResult]:
    results: list[FieldValidationResult] = []
    for planned in _form_plan(type(self)):
        value = getattr(self, planned.name)
        hook: Callable[[Any], FieldValidationResult] | None = getattr(
            self, f"validate_{planned.name}", None
        )
        results.append(hook(value) if callable(hook) else validate_value(value))
    return results


def _validate(self: Any) -> FormValidationResult:
    form = self.filled_form_pre_validation()
    validations = self.field_validations()
    is_valid = True
    for element, validation in zip(form.elements, validations, strict=True):
        is_valid = is_valid and isinstance(validation, Valid)
        element.update(validation)
    logger.debug(
        "Validated %s: %s", type(self).__name__, "valid" if is_valid else "invalid"
    )
    return FormValidationResult(form=form, is_valid=is_valid)
