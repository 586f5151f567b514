from __future__ import annotations

import enum
import logging
import os
from typing import Any, Callable, Mapping

from django import forms
from django.core.files import File

from .forms import validate_field, validate_form

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "An unexpected error occurred"

SubmitCallable = Callable[[dict[str, Any], dict[str, Any]], Mapping[str, Any]]


class SubmissionStatus(enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FormController:
    """Values, touched/error state and submission lifecycle for one form.

    ``submit`` receives the text values and the file values and returns the
    ``{"success": ..., "error": ...}`` result of the transport call.
    """

    def __init__(
        self,
        form_class: type[forms.Form],
        submit: SubmitCallable,
        failure_message: str = "Submission failed",
    ) -> None:
        self.form_class = form_class
        self._submit = submit
        self._failure_message = failure_message
        self._file_fields = {
            name for name, field in form_class.base_fields.items() if isinstance(field, forms.FileField)
        }
        self.status = SubmissionStatus.IDLE
        self.message: str | None = None
        self.last_result: Mapping[str, Any] | None = None
        self.reset()

    def reset(self) -> None:
        self.values: dict[str, str] = {
            name: "" for name in self.form_class.base_fields if name not in self._file_fields
        }
        self.files: dict[str, Any] = {name: None for name in self._file_fields}
        self.touched: set[str] = set()
        self.errors: dict[str, str] = {}

    @property
    def can_submit(self) -> bool:
        return self.status is not SubmissionStatus.SUBMITTING

    def set_value(self, name: str, value: str) -> None:
        if name not in self.values:
            raise KeyError(name)
        self.values[name] = value

    def set_file(self, name: str, file: Any) -> None:
        if name not in self.files:
            raise KeyError(name)
        if file is not None and not isinstance(file, File):
            # Plain handles from open() carry a full path and no size.
            file = File(file, name=os.path.basename(getattr(file, "name", "") or "") or None)
        self.files[name] = file

    def _present_files(self) -> dict[str, Any]:
        return {name: file for name, file in self.files.items() if file is not None}

    def blur(self, name: str) -> str | None:
        self.touched.add(name)
        error = validate_field(self.form_class, name, self.values, self._present_files())
        if error:
            self.errors[name] = error
        else:
            self.errors.pop(name, None)
        return error

    def validate(self) -> bool:
        self.touched.update(self.values)
        self.touched.update(self.files)
        self.errors = validate_form(self.form_class, self.values, self._present_files())
        return not self.errors

    def submit(self) -> SubmissionStatus:
        if not self.can_submit:
            return self.status
        if not self.validate():
            return self.status

        self.status = SubmissionStatus.SUBMITTING
        self.message = None
        try:
            result = self._submit(dict(self.values), self._present_files())
        except Exception:
            logger.exception("%s submission raised", self.form_class.__name__)
            self.status = SubmissionStatus.FAILED
            self.message = UNEXPECTED_ERROR
            return self.status

        self.last_result = result
        if result.get("success"):
            self.status = SubmissionStatus.SUCCEEDED
            self.reset()
        else:
            self.status = SubmissionStatus.FAILED
            self.message = result.get("error") or self._failure_message
        return self.status
