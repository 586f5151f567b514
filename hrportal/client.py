from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, Mapping
from urllib.parse import unquote

import requests

from .form_state import UNEXPECTED_ERROR, FormController
from .forms import InternshipApplicationForm, OfferLetterForm

logger = logging.getLogger(__name__)

INTERNSHIP_APPLICATION_PATH = "/api/internship-application"
OFFER_LETTER_PATH = "/api/offer-letter"

_FILENAME_STAR = re.compile(r"filename\*=UTF-8''([^;]+)", re.IGNORECASE)
_FILENAME = re.compile(r'filename="([^"]*)"', re.IGNORECASE)


def _unexpected() -> dict[str, Any]:
    return {"success": False, "error": UNEXPECTED_ERROR}


def filename_from_disposition(header: str | None, default: str = "OfferLetter.pdf") -> str:
    if not header:
        return default
    match = _FILENAME_STAR.search(header)
    if match:
        return unquote(match.group(1))
    match = _FILENAME.search(header)
    if match:
        return match.group(1)
    return default


def safe_json(resp: requests.Response) -> dict[str, Any]:
    try:
        body = resp.json()
    except ValueError:
        logger.warning("Non-JSON response from %s (status %s)", resp.url, resp.status_code)
        return _unexpected()
    if not isinstance(body, dict) or "success" not in body:
        return _unexpected()
    return body


class HRPortalClient:
    """HTTP client for the two HR portal endpoints.

    Network problems never escape as exceptions: every call returns a
    ``{"success": bool, "data" | "error": ...}`` mapping.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 60,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, path: str, **kwargs) -> requests.Response:
        return self.session.post(f"{self.base_url}{path}", timeout=self.timeout, **kwargs)

    def submit_internship_application(self, fields: Mapping[str, Any], resume_file: Any) -> dict[str, Any]:
        filename = os.path.basename(getattr(resume_file, "name", "") or "resume")
        content_type = getattr(resume_file, "content_type", None) or "application/octet-stream"
        data = {key: "" if value is None else str(value) for key, value in fields.items()}
        try:
            resp = self._post(
                INTERNSHIP_APPLICATION_PATH,
                data=data,
                files={"resume": (filename, resume_file, content_type)},
            )
        except requests.RequestException as exc:
            logger.warning("Internship application request failed: %s", exc)
            return _unexpected()
        return safe_json(resp)

    def generate_offer_letter(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        try:
            resp = self._post(OFFER_LETTER_PATH, json=dict(fields))
        except requests.RequestException as exc:
            logger.warning("Offer letter request failed: %s", exc)
            return _unexpected()

        content_type = resp.headers.get("Content-Type", "")
        if resp.ok and content_type.startswith("application/pdf"):
            return {
                "success": True,
                "data": {
                    "filename": filename_from_disposition(resp.headers.get("Content-Disposition")),
                    "content": resp.content,
                },
            }
        return safe_json(resp)


def save_offer_letter(result: Mapping[str, Any], directory: Path) -> Path:
    """Write a successful ``generate_offer_letter`` result to ``directory``."""
    data = result["data"]
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / os.path.basename(data["filename"] or "OfferLetter.pdf")
    target.write_bytes(data["content"])
    return target


def internship_application_controller(client: HRPortalClient) -> FormController:
    def submit(values: dict[str, Any], files: dict[str, Any]) -> Mapping[str, Any]:
        return client.submit_internship_application(values, files["resume"])

    return FormController(InternshipApplicationForm, submit, "Failed to submit application")


def offer_letter_controller(client: HRPortalClient) -> FormController:
    def submit(values: dict[str, Any], files: dict[str, Any]) -> Mapping[str, Any]:
        return client.generate_offer_letter(values)

    return FormController(OfferLetterForm, submit, "Failed to generate offer letter")
