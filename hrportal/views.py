from __future__ import annotations

import json
import logging

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import render
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .forms import InternshipApplicationForm, OfferLetterForm, client_rules
from .schemas import OfferLetter
from .services.application_service import process_internship_application
from .services.offer_letter_service import generate_offer_letter
from .utils import attachment_disposition

logger = logging.getLogger(__name__)

APPLICATION_FAILED = "Failed to process internship application"
OFFER_LETTER_FAILED = "Failed to generate offer letter"


def _failure(message: str) -> JsonResponse:
    return JsonResponse({"success": False, "error": message}, status=500)


@require_GET
def landing(request: HttpRequest) -> HttpResponse:
    context = {
        "application_form": InternshipApplicationForm(),
        "offer_form": OfferLetterForm(),
        "validation_rules": {
            "internship": client_rules(InternshipApplicationForm),
            "offer": client_rules(OfferLetterForm),
        },
    }
    return render(request, "hrportal/index.html", context)


@csrf_exempt
@require_POST
def internship_application(request: HttpRequest) -> HttpResponse:
    # No server-side field validation: the browser form has already checked them.
    try:
        data = process_internship_application(request.POST, request.FILES)
    except Exception:
        logger.exception("Internship application could not be processed")
        return _failure(APPLICATION_FAILED)
    return JsonResponse({"success": True, "data": data})


@csrf_exempt
@require_POST
def offer_letter(request: HttpRequest) -> HttpResponse:
    try:
        payload = json.loads(request.body or b"{}")
        offer = OfferLetter.from_payload(payload)
        result = generate_offer_letter(offer)
    except Exception:
        logger.exception("Error generating offer letter")
        return _failure(OFFER_LETTER_FAILED)

    response = HttpResponse(result.content, content_type=result.content_type)
    response["Content-Disposition"] = attachment_disposition(result.filename)
    response["Content-Length"] = str(len(result.content))
    response["Cache-Control"] = "no-store"
    return response
