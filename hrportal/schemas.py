from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping

# snake_case attribute -> camelCase key used on the wire and in the HTML forms.
INTERNSHIP_APPLICATION_KEYS = {
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "phone": "phone",
    "university": "university",
    "major": "major",
    "graduation_year": "graduationYear",
    "cover_letter": "coverLetter",
}

OFFER_LETTER_KEYS = {
    "candidate_name": "candidateName",
    "position": "position",
    "start_date": "startDate",
    "salary": "salary",
    "department": "department",
    "reporting_manager": "reportingManager",
    "terms": "terms",
}


@dataclass(frozen=True)
class InternshipApplication:
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    university: str | None = None
    major: str | None = None
    graduation_year: str | None = None
    cover_letter: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "InternshipApplication":
        return cls(**{attr: payload.get(key) for attr, key in INTERNSHIP_APPLICATION_KEYS.items()})

    def to_payload(self) -> dict[str, Any]:
        values = asdict(self)
        return {key: values[attr] for attr, key in INTERNSHIP_APPLICATION_KEYS.items()}


@dataclass(frozen=True)
class OfferLetter:
    candidate_name: str = ""
    position: str = ""
    start_date: str = ""
    salary: str = ""
    department: str = ""
    reporting_manager: str = ""
    terms: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "OfferLetter":
        values = {}
        for attr, key in OFFER_LETTER_KEYS.items():
            value = payload.get(key)
            values[attr] = "" if value is None else str(value)
        return cls(**values)

    def to_payload(self) -> dict[str, str]:
        return {key: getattr(self, attr) for attr, key in OFFER_LETTER_KEYS.items()}

