from __future__ import annotations

from typing import Any, Mapping

from django import forms
from django.core.exceptions import ValidationError

EXECUTABLE_EXTENSIONS = {
    ".exe",
    ".bat",
    ".cmd",
    ".sh",
    ".ps1",
    ".vbs",
    ".js",
    ".jar",
    ".msi",
    ".com",
    ".scr",
    ".apk",
    ".app",
    ".bin",
    ".dll",
}

RESUME_EXTENSIONS = {".pdf", ".doc", ".docx"}


def _extension(filename: str) -> str:
    return ("." + filename.rsplit(".", 1)[-1].lower()) if "." in filename else ""


def _required(message: str) -> dict[str, str]:
    return {"required": message}


class InternshipApplicationForm(forms.Form):
    # Field names match the multipart keys posted to the API.
    firstName = forms.CharField(
        label="First Name",
        error_messages=_required("First name is required"),
    )
    lastName = forms.CharField(
        label="Last Name",
        error_messages=_required("Last name is required"),
    )
    email = forms.EmailField(
        label="Email",
        error_messages={"required": "Email is required", "invalid": "Invalid email"},
    )
    phone = forms.CharField(
        label="Phone",
        error_messages=_required("Phone number is required"),
    )
    university = forms.CharField(
        label="University",
        error_messages=_required("University is required"),
    )
    major = forms.CharField(
        label="Major",
        error_messages=_required("Major is required"),
    )
    graduationYear = forms.CharField(
        label="Graduation Year",
        error_messages=_required("Graduation year is required"),
    )
    resume = forms.FileField(
        label="Upload Resume",
        error_messages=_required("Resume is required"),
        widget=forms.ClearableFileInput(attrs={"accept": ".pdf,.doc,.docx"}),
    )
    coverLetter = forms.CharField(
        label="Cover Letter",
        error_messages=_required("Cover letter is required"),
        widget=forms.Textarea(attrs={"rows": 4}),
    )

    def clean_resume(self):
        file = self.cleaned_data.get("resume")
        if not file:
            return file
        filename = file.name or ""
        ext = _extension(filename)
        if ext in EXECUTABLE_EXTENSIONS:
            raise ValidationError("Executable files are not allowed.")
        if ext not in RESUME_EXTENSIONS:
            raise ValidationError("Resume must be a PDF, DOC or DOCX file.")
        return file


class OfferLetterForm(forms.Form):
    candidateName = forms.CharField(
        label="Candidate Name",
        error_messages=_required("Candidate name is required"),
    )
    position = forms.CharField(
        label="Position",
        error_messages=_required("Position is required"),
    )
    # Picked with a date input but carried as plain text.
    startDate = forms.CharField(
        label="Start Date",
        error_messages=_required("Start date is required"),
        widget=forms.DateInput(attrs={"type": "date"}),
    )
    salary = forms.CharField(
        label="Salary",
        error_messages=_required("Salary is required"),
    )
    department = forms.CharField(
        label="Department",
        error_messages=_required("Department is required"),
    )
    reportingManager = forms.CharField(
        label="Reporting Manager",
        error_messages=_required("Reporting manager is required"),
    )
    terms = forms.CharField(
        label="Terms and Conditions",
        error_messages=_required("Terms are required"),
        widget=forms.Textarea(attrs={"rows": 4}),
    )


def validate_form(
    form_class: type[forms.Form],
    values: Mapping[str, Any],
    files: Mapping[str, Any] | None = None,
) -> dict[str, str]:
    """Run every field rule and return the first message per failing field."""
    form = form_class(data=dict(values), files=dict(files or {}))
    if form.is_valid():
        return {}
    return {name: messages[0] for name, messages in form.errors.items()}


def validate_field(
    form_class: type[forms.Form],
    name: str,
    values: Mapping[str, Any],
    files: Mapping[str, Any] | None = None,
) -> str | None:
    return validate_form(form_class, values, files).get(name)


def client_rules(form_class: type[forms.Form]) -> dict[str, dict[str, str]]:
    """Field rules in the shape the browser script checks on blur and submit."""
    rules: dict[str, dict[str, str]] = {}
    for name, field in form_class.base_fields.items():
        rule = {"required": str(field.error_messages["required"])}
        if isinstance(field, forms.EmailField):
            rule["kind"] = "email"
            rule["invalid"] = str(field.error_messages["invalid"])
        elif isinstance(field, forms.FileField):
            rule["kind"] = "file"
            rule["accept"] = field.widget.attrs.get("accept", "")
        else:
            rule["kind"] = "text"
        rules[name] = rule
    return rules
