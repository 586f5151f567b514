from __future__ import annotations

import logging
from dataclasses import dataclass

from ..offer_letter import OfferLetterAssets, build_offer_letter_definition
from ..rendering import get_document_renderer
from ..schemas import OfferLetter
from ..utils import offer_letter_filename

logger = logging.getLogger(__name__)


@dataclass
class OfferLetterResult:
    content: bytes
    content_type: str
    filename: str


def generate_offer_letter(offer: OfferLetter) -> OfferLetterResult:
    renderer = get_document_renderer()
    definition = build_offer_letter_definition(offer, OfferLetterAssets.from_settings())
    pdf_bytes = renderer.render(definition)
    if not pdf_bytes.startswith(b"%PDF-"):
        raise ValueError(f"Renderer returned invalid PDF content starting with {pdf_bytes[:12]!r}")

    filename = offer_letter_filename(offer.candidate_name)
    logger.info("Generated offer letter %s (%d bytes)", filename, len(pdf_bytes))
    return OfferLetterResult(content=pdf_bytes, content_type="application/pdf", filename=filename)
