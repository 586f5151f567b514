from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from django.conf import settings

from .content_tree import (
    STAR,
    BulletList,
    Column,
    Columns,
    DocumentDefinition,
    Image,
    Stack,
    Text,
    TextStyle,
)
from .schemas import OfferLetter

# US Letter is 612 x 792 points.
PAGE_WIDTH = 612
PAGE_MARGINS = (40, 40, 40, 60)

# Empty fields keep the bracketed placeholder instead of failing the request.
FIELD_DEFAULTS = {
    "candidate_name": "[Candidate Name]",
    "position": "[Position]",
}

# Letter content the request does not carry yet. Kept literal until the forms
# collect these values.
INTERN_COLLEGE = "[Candidate College]"
BATCH_DATES = "10 May to 10 June 2025"
STIPEND_AMOUNT = "₹15000"
JOB_TITLE = "Software Developer"

COMPANY_NAME = "Micro IT"
SIGNATORY = "Mr. Vijay Kumar"
SIGNATORY_TITLE = "Founder, Micro IT"

POINTS_TO_REMEMBER = (
    "You have to develop any two projects from the given projects list in your own "
    "interested programming languages.",
    "You can also submit your projects before 15 June.",
    "You can join the Micro IT by post internship opportunities after completion of "
    "this internship.",
)

STYLES = {
    "companyName": TextStyle(font_size=18, bold=True),
    "offerTitle": TextStyle(font_size=16, bold=True, underline=True, color="#1a2b4d"),
    "candidateName": TextStyle(font_size=14, bold=True, margin=(0, 0, 0, 5)),
    "candidateDetails": TextStyle(font_size=12, margin=(0, 0, 0, 3)),
    "subheader": TextStyle(font_size=12, bold=True, margin=(0, 10, 0, 5)),
    "body": TextStyle(font_size=12, margin=(0, 0, 0, 5)),
}


@dataclass(frozen=True)
class OfferLetterAssets:
    logo: Path
    text_logo: Path
    badge: Path
    footer: Path

    @classmethod
    def from_mapping(cls, paths: Mapping[str, object]) -> "OfferLetterAssets":
        return cls(
            logo=Path(paths["logo"]),
            text_logo=Path(paths["text_logo"]),
            badge=Path(paths["badge"]),
            footer=Path(paths["footer"]),
        )

    @classmethod
    def from_settings(cls) -> "OfferLetterAssets":
        return cls.from_mapping(settings.HRPORTAL_OFFER_ASSETS)


def field_or_default(offer: OfferLetter, name: str) -> str:
    value = (getattr(offer, name) or "").strip()
    return value or FIELD_DEFAULTS[name]


def _header(assets: OfferLetterAssets) -> Columns:
    logos = Columns(
        columns=(
            Column(Image(assets.logo, width=100), width=100),
            Column(Image(assets.text_logo, width=300), width=300),
        ),
        column_gap=20,
        margin=(0, 0, 0, 5),
    )
    return Columns(
        columns=(
            Column(Stack((logos,)), width=STAR),
            Column(Image(assets.badge, width=100, alignment="right"), width=100),
        ),
        column_gap=0,
        margin=(0, 0, 0, 30),
    )


def _offer_paragraph() -> str:
    return (
        f"We are pleased to offer you a 1-month internship at MICRO IT as a {JOB_TITLE} in "
        "Full-Stack Development. This internship is unpaid, but based on excellence, a "
        f"post-internship opportunity with Stipend up to {STIPEND_AMOUNT} can be given by "
        f"{COMPANY_NAME}. Your internship batch starts on {BATCH_DATES} and you complete your "
        "projects as soon as you complete and before 15 June 2025."
    )


def build_offer_letter_definition(
    offer: OfferLetter, assets: OfferLetterAssets
) -> DocumentDefinition:
    """Describe the internship offer letter for ``offer``.

    Nothing is read from disk here; image nodes only carry their paths. The
    candidate name is the only request field printed in the letter body. The
    position goes into the PDF title metadata. College, batch dates, stipend and
    job title are fixed text.
    """
    candidate_name = field_or_default(offer, "candidate_name")
    position = field_or_default(offer, "position")

    content = [
        _header(assets),
        Text(candidate_name, style="candidateName"),
        Text(f"{JOB_TITLE} Intern", style="candidateDetails"),
        Text(f"College: {INTERN_COLLEGE}", style="candidateDetails"),
        Text("\nDear Intern,", style="body", margin=(0, 20, 0, 10)),
        Text(_offer_paragraph(), style="body", margin=(0, 0, 0, 15)),
        Text("Points to remember", style="subheader", margin=(0, 10, 0, 5)),
        BulletList(POINTS_TO_REMEMBER, style="body", margin=(0, 0, 0, 20)),
        Text("Looking forward to working with you!", style="body", margin=(0, 10, 0, 20)),
        Text("With Best Wishes,", style="body"),
        Text(SIGNATORY, style="body"),
        Text(SIGNATORY_TITLE, style="body"),
    ]

    footer_image = Image(assets.footer, width=PAGE_WIDTH, alignment="center")

    def footer(current_page: int, page_count: int) -> Image:
        return footer_image

    return DocumentDefinition(
        content=content,
        page_size="LETTER",
        page_margins=PAGE_MARGINS,
        styles=dict(STYLES),
        footer=footer,
        title=f"Internship Offer Letter - {candidate_name} ({position})",
        author=COMPANY_NAME,
    )
