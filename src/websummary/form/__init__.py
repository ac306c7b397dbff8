"""Form descriptions: typed fields to input widgets plus validation feedback."""

from __future__ import annotations

from websummary.form.form import (
    Form,
    FormConfig,
    FormElement,
    FormMethod,
    FormValidationResult,
    form_field,
    html_form,
)
from websummary.form.inputs import (
    FormInput,
    InputElement,
    InputFeedback,
    InputType,
    MultiSelect,
    MultiSelectType,
    SingleSelect,
    SingleSelectType,
    Spreadsheet,
    TextArea,
)
from websummary.form.table_input import CsvDialect, CsvWithHeader, TableInput, TsvNoHeader
from websummary.form.validation import FieldValidationResult, Invalid, Valid
from websummary.form.widgets import (
    FloatInputConfig,
    IntInputConfig,
    SpreadsheetConfig,
    TextAreaConfig,
    TextInputConfig,
    create_form_input,
    default_config,
    default_form_input,
    register_form_input,
)

__all__ = [
    "CsvDialect",
    "CsvWithHeader",
    "FieldValidationResult",
    "FloatInputConfig",
    "Form",
    "FormConfig",
    "FormElement",
    "FormInput",
    "FormMethod",
    "FormValidationResult",
    "InputElement",
    "InputFeedback",
    "InputType",
    "IntInputConfig",
    "Invalid",
    "MultiSelect",
    "MultiSelectType",
    "SingleSelect",
    "SingleSelectType",
    "Spreadsheet",
    "SpreadsheetConfig",
    "TableInput",
    "TextArea",
    "TextAreaConfig",
    "TextInputConfig",
    "TsvNoHeader",
    "Valid",
    "create_form_input",
    "default_config",
    "default_form_input",
    "form_field",
    "html_form",
    "register_form_input",
]
