from __future__ import annotations

import re
import unicodedata
from urllib.parse import quote

DEFAULT_UPLOAD_NAME = "resume"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def sanitize_upload_name(filename: str | None) -> str:
    """
    Reduce a client-supplied filename to a single safe path component.
    "../../etc/passwd" -> "passwd", "C:\\cv\\me.pdf" -> "me.pdf"
    """
    name = (filename or "").replace("\\", "/").rsplit("/", 1)[-1]
    name = _CONTROL_CHARS.sub("", name)
    name = name.strip().lstrip(".").strip()
    return name or DEFAULT_UPLOAD_NAME


def _ascii_filename(filename: str) -> str:
    normalized = unicodedata.normalize("NFKD", filename)
    ascii_name = normalized.encode("ascii", "ignore").decode("ascii")
    ascii_name = _CONTROL_CHARS.sub("", ascii_name)
    return re.sub(r'["\\/;]+', "_", ascii_name)


def attachment_disposition(filename: str) -> str:
    fallback = _ascii_filename(filename) or "download"
    encoded = quote(_CONTROL_CHARS.sub("", filename), safe="")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{encoded}"


def offer_letter_filename(candidate_name: str | None) -> str:
    name = _CONTROL_CHARS.sub("", (candidate_name or "").strip())
    return f"OfferLetter_{name}.pdf"
