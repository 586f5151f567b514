from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Mapping

from django.conf import settings
from django.core.files.uploadedfile import UploadedFile

from ..schemas import InternshipApplication
from ..utils import sanitize_upload_name

logger = logging.getLogger(__name__)


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def stored_resume_name(original_name: str | None, received_at_ms: int) -> str:
    # Same millisecond and same original name map to the same file.
    return f"{received_at_ms}-{sanitize_upload_name(original_name)}"


def store_resume(uploaded: UploadedFile, upload_dir: Path | None = None) -> str:
    directory = Path(upload_dir or settings.HRPORTAL_UPLOAD_DIR)
    directory.mkdir(parents=True, exist_ok=True)

    stored_name = stored_resume_name(uploaded.name, _timestamp_ms())
    with open(directory / stored_name, "wb") as destination:
        for chunk in uploaded.chunks():
            destination.write(chunk)
    logger.info("Stored resume upload %s (%d bytes)", stored_name, uploaded.size or 0)
    return stored_name


def process_internship_application(
    post: Mapping[str, str], files: Mapping[str, UploadedFile]
) -> dict:
    """Store the resume, if any, and echo the submitted fields back."""
    application = InternshipApplication.from_payload(post)
    resume = files.get("resume")
    stored_name = store_resume(resume) if resume else None

    data = application.to_payload()
    data["resume"] = stored_name
    return data
