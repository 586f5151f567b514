import json
import tempfile
from pathlib import Path
from unittest import mock

import requests
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase, override_settings
from django.urls import reverse
from reportlab.pdfgen.canvas import Canvas

from .client import HRPortalClient, internship_application_controller, offer_letter_controller, save_offer_letter
from .content_tree import STAR, BulletList, Columns, DocumentDefinition, Image, Stack, Text
from .form_state import UNEXPECTED_ERROR, FormController, SubmissionStatus
from .forms import InternshipApplicationForm, OfferLetterForm, client_rules, validate_field, validate_form
from .offer_letter import (
    BATCH_DATES,
    INTERN_COLLEGE,
    JOB_TITLE,
    STIPEND_AMOUNT,
    OfferLetterAssets,
    build_offer_letter_definition,
)
from .rendering import get_document_renderer
from .schemas import InternshipApplication, OfferLetter
from .services.application_service import store_resume, stored_resume_name
from .utils import attachment_disposition, offer_letter_filename, sanitize_upload_name

APPLICATION_FIELDS = {
    "firstName": "Ada",
    "lastName": "Lovelace",
    "email": "ada@example.com",
    "phone": "+44 20 7946 0000",
    "university": "University of London",
    "major": "Mathematics",
    "graduationYear": "2026",
    "coverLetter": "I would love to join the analytical engine team.",
}

OFFER_FIELDS = {
    "candidateName": "Ada Lovelace",
    "position": "Software Developer Intern",
    "startDate": "2025-05-10",
    "salary": "15000",
    "department": "Engineering",
    "reportingManager": "Charles Babbage",
    "terms": "Standard internship terms.",
}

MISSING_FONTS = {
    "name": "MissingFamily",
    "normal": "/nonexistent/fonts/Missing-Regular.ttf",
    "bold": "/nonexistent/fonts/Missing-Bold.ttf",
    "italic": "/nonexistent/fonts/Missing-Italic.ttf",
    "bold_italic": "/nonexistent/fonts/Missing-BoldItalic.ttf",
}


def _resume(name="cv.pdf", content=b"%PDF-1.4 resume"):
    return SimpleUploadedFile(name, content, content_type="application/pdf")


def _texts(definition):
    return [node.text for node in definition.iter_nodes() if isinstance(node, Text)]


class OfferLetterDefinitionTests(SimpleTestCase):
    def setUp(self):
        self.assets = OfferLetterAssets.from_settings()

    def test_candidate_name_is_printed(self):
        definition = build_offer_letter_definition(OfferLetter.from_payload(OFFER_FIELDS), self.assets)
        self.assertIn("Ada Lovelace", _texts(definition))

    def test_empty_candidate_name_falls_back_to_placeholder(self):
        payload = dict(OFFER_FIELDS, candidateName="")
        definition = build_offer_letter_definition(OfferLetter.from_payload(payload), self.assets)
        candidate_lines = [
            node.text
            for node in definition.iter_nodes()
            if isinstance(node, Text) and node.style == "candidateName"
        ]
        self.assertEqual(candidate_lines, ["[Candidate Name]"])

    def test_missing_fields_use_placeholders(self):
        definition = build_offer_letter_definition(OfferLetter.from_payload({}), self.assets)
        self.assertIn("[Candidate Name]", _texts(definition))
        self.assertIn("[Position]", definition.title)

    def test_fixed_letter_content_ignores_request(self):
        definition = build_offer_letter_definition(OfferLetter.from_payload(OFFER_FIELDS), self.assets)
        texts = _texts(definition)
        self.assertIn(f"{JOB_TITLE} Intern", texts)
        self.assertIn(f"College: {INTERN_COLLEGE}", texts)
        paragraph = next(text for text in texts if text.startswith("We are pleased"))
        self.assertIn(BATCH_DATES, paragraph)
        self.assertIn(STIPEND_AMOUNT, paragraph)
        for field in ("reportingManager", "department", "startDate", "terms"):
            self.assertFalse(any(OFFER_FIELDS[field] in text for text in texts))

    def test_page_layout(self):
        definition = build_offer_letter_definition(OfferLetter.from_payload(OFFER_FIELDS), self.assets)
        self.assertEqual(definition.page_size, "LETTER")
        self.assertEqual(definition.page_margins, (40, 40, 40, 60))

        header = definition.content[0]
        self.assertIsInstance(header, Columns)
        self.assertEqual([column.width for column in header.columns], [STAR, 100])
        self.assertIsInstance(header.columns[0].content, Stack)
        self.assertEqual(header.columns[1].content.path, self.assets.badge)

        lists = [node for node in definition.iter_nodes() if isinstance(node, BulletList)]
        self.assertEqual(len(lists), 1)
        self.assertEqual(len(lists[0].items), 3)

    def test_footer_is_identical_on_every_page(self):
        definition = build_offer_letter_definition(OfferLetter.from_payload(OFFER_FIELDS), self.assets)
        first = definition.footer(1, 3)
        last = definition.footer(3, 3)
        self.assertIsInstance(first, Image)
        self.assertEqual(first, last)
        self.assertEqual(first.width, 612)
        self.assertEqual(first.path, self.assets.footer)

    def test_header_image_widths_are_exact(self):
        definition = build_offer_letter_definition(OfferLetter.from_payload(OFFER_FIELDS), self.assets)
        widths = {node.path: node.width for node in definition.iter_nodes() if isinstance(node, Image)}
        self.assertEqual(widths[self.assets.logo], 100)
        self.assertEqual(widths[self.assets.text_logo], 300)
        self.assertEqual(widths[self.assets.badge], 100)

    def test_salutation_keeps_blank_line_above(self):
        definition = build_offer_letter_definition(OfferLetter.from_payload(OFFER_FIELDS), self.assets)
        self.assertIn("\nDear Intern,", _texts(definition))

    def test_offer_title_style_is_underlined(self):
        definition = build_offer_letter_definition(OfferLetter.from_payload(OFFER_FIELDS), self.assets)
        style = definition.style("offerTitle")
        self.assertTrue(style.underline)
        self.assertTrue(style.bold)
        self.assertEqual(style.color, "#1a2b4d")


class DocumentRendererTests(SimpleTestCase):
    def test_render_returns_pdf(self):
        definition = build_offer_letter_definition(
            OfferLetter.from_payload(OFFER_FIELDS), OfferLetterAssets.from_settings()
        )
        pdf_bytes = get_document_renderer().render(definition)
        self.assertTrue(pdf_bytes.startswith(b"%PDF-"))

    def test_footer_is_drawn_at_page_width(self):
        assets = OfferLetterAssets.from_settings()
        definition = build_offer_letter_definition(OfferLetter.from_payload(OFFER_FIELDS), assets)

        with mock.patch.object(Canvas, "drawImage", autospec=True) as draw_image:
            get_document_renderer().render(definition)

        footer_draws = [call for call in draw_image.call_args_list if call.args[1] == str(assets.footer)]
        self.assertEqual([call.kwargs["width"] for call in footer_draws], [612.0])
        self.assertEqual([call.args[2] for call in footer_draws], [0.0])
        # 1224x120 footer asset at 612 pt wide fills the 60 pt bottom margin.
        self.assertEqual([call.kwargs["height"] for call in footer_draws], [60.0])
        self.assertEqual([call.args[3] for call in footer_draws], [0])

    def test_renderer_is_shared(self):
        self.assertIs(get_document_renderer(), get_document_renderer())

    def test_footer_drawn_on_every_page_with_page_count(self):
        footer_image = OfferLetterAssets.from_settings().footer
        calls = []

        def footer(current_page, page_count):
            calls.append((current_page, page_count))
            return Image(footer_image, width=612, alignment="center")

        definition = DocumentDefinition(
            content=[Text(f"Line {index} <with markup & ampersands>", style="body") for index in range(150)],
            page_margins=(40, 40, 40, 60),
            styles=build_offer_letter_definition(
                OfferLetter(), OfferLetterAssets.from_settings()
            ).styles,
            footer=footer,
        )
        pdf_bytes = get_document_renderer().render(definition)

        self.assertTrue(pdf_bytes.startswith(b"%PDF-"))
        page_count = len(calls)
        self.assertGreater(page_count, 1)
        self.assertEqual([page for page, _ in calls], list(range(1, page_count + 1)))
        self.assertTrue(all(count == page_count for _, count in calls))


class SanitizationTests(SimpleTestCase):
    def test_upload_name_strips_directories(self):
        self.assertEqual(sanitize_upload_name("../../etc/passwd"), "passwd")
        self.assertEqual(sanitize_upload_name("C:\\Users\\ada\\cv.pdf"), "cv.pdf")

    def test_upload_name_strips_control_characters_and_dots(self):
        self.assertEqual(sanitize_upload_name("..\x00cv\n.pdf"), "cv.pdf")
        self.assertEqual(sanitize_upload_name(".."), "resume")
        self.assertEqual(sanitize_upload_name(None), "resume")

    def test_disposition_escapes_header_breaking_characters(self):
        header = attachment_disposition('OfferLetter_Ada "x"\r\nSet-Cookie: a=b.pdf')
        self.assertNotIn("\r", header)
        self.assertNotIn("\n", header)
        self.assertTrue(header.startswith('attachment; filename="OfferLetter_Ada _x_Set-Cookie: a=b.pdf"'))
        self.assertIn("filename*=UTF-8''OfferLetter_Ada%20%22x%22Set-Cookie%3A%20a%3Db.pdf", header)

    def test_disposition_keeps_unicode_in_extended_parameter(self):
        header = attachment_disposition(offer_letter_filename("Zoë"))
        self.assertIn('filename="OfferLetter_Zoe.pdf"', header)
        self.assertIn("filename*=UTF-8''OfferLetter_Zo%C3%AB.pdf", header)


class ResumeStorageTests(SimpleTestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.upload_dir = Path(tmp.name) / "uploads"

    def test_stored_name_uses_timestamp_prefix(self):
        self.assertEqual(stored_resume_name("cv.pdf", 1717000000123), "1717000000123-cv.pdf")

    def test_directory_is_created_on_demand(self):
        name = store_resume(_resume(), self.upload_dir)
        self.assertTrue((self.upload_dir / name).exists())
        self.assertEqual((self.upload_dir / name).read_bytes(), b"%PDF-1.4 resume")

    def test_same_name_different_millisecond_keeps_both_files(self):
        target = "hrportal.services.application_service._timestamp_ms"
        with mock.patch(target, side_effect=[1000, 1001]):
            first = store_resume(_resume(content=b"first"), self.upload_dir)
            second = store_resume(_resume(content=b"second"), self.upload_dir)
        self.assertNotEqual(first, second)
        self.assertEqual(len(list(self.upload_dir.iterdir())), 2)

    def test_same_name_same_millisecond_collides(self):
        target = "hrportal.services.application_service._timestamp_ms"
        with mock.patch(target, return_value=1000):
            first = store_resume(_resume(content=b"first"), self.upload_dir)
            second = store_resume(_resume(content=b"second"), self.upload_dir)
        self.assertEqual(first, second)
        self.assertEqual(len(list(self.upload_dir.iterdir())), 1)
        self.assertEqual((self.upload_dir / second).read_bytes(), b"second")


class InternshipApplicationViewTests(SimpleTestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.upload_dir = Path(tmp.name) / "uploads"
        settings_override = override_settings(HRPORTAL_UPLOAD_DIR=self.upload_dir)
        settings_override.enable()
        self.addCleanup(settings_override.disable)

    def test_post_echoes_fields_and_stored_filename(self):
        response = self.client.post(
            reverse("internship_application"),
            dict(APPLICATION_FIELDS, resume=_resume()),
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        for key, value in APPLICATION_FIELDS.items():
            self.assertEqual(body["data"][key], value)
        self.assertTrue(body["data"]["resume"].endswith("-cv.pdf"))
        self.assertTrue((self.upload_dir / body["data"]["resume"]).exists())

    def test_post_without_resume_reports_null(self):
        response = self.client.post(reverse("internship_application"), APPLICATION_FIELDS)

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()["data"]["resume"])

    def test_missing_fields_are_echoed_as_null(self):
        response = self.client.post(reverse("internship_application"), {"firstName": "Ada"})

        data = response.json()["data"]
        self.assertEqual(data["firstName"], "Ada")
        self.assertIsNone(data["email"])

    def test_traversal_in_upload_name_stays_in_upload_dir(self):
        response = self.client.post(
            reverse("internship_application"),
            dict(APPLICATION_FIELDS, resume=_resume(name="../../evil.pdf")),
        )

        stored = response.json()["data"]["resume"]
        self.assertNotIn("/", stored)
        self.assertTrue((self.upload_dir / stored).exists())

    def test_storage_failure_returns_generic_error(self):
        with mock.patch(
            "hrportal.services.application_service.store_resume", side_effect=OSError("disk full")
        ):
            response = self.client.post(
                reverse("internship_application"),
                dict(APPLICATION_FIELDS, resume=_resume()),
            )

        self.assertEqual(response.status_code, 500)
        self.assertEqual(
            response.json(),
            {"success": False, "error": "Failed to process internship application"},
        )

    def test_get_is_not_allowed(self):
        response = self.client.get(reverse("internship_application"))
        self.assertEqual(response.status_code, 405)


class OfferLetterViewTests(SimpleTestCase):
    def _post(self, payload):
        return self.client.post(
            reverse("offer_letter"), data=json.dumps(payload), content_type="application/json"
        )

    def test_post_returns_pdf_attachment(self):
        response = self._post(OFFER_FIELDS)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Content-Type"], "application/pdf")
        self.assertIn('attachment; filename="OfferLetter_Ada Lovelace.pdf"', response["Content-Disposition"])
        self.assertTrue(response.content.startswith(b"%PDF-"))
        self.assertEqual(response["Content-Length"], str(len(response.content)))

    def test_empty_candidate_name_still_renders(self):
        response = self._post(dict(OFFER_FIELDS, candidateName=""))

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.content.startswith(b"%PDF-"))
        self.assertIn('filename="OfferLetter_.pdf"', response["Content-Disposition"])

    def test_markup_in_fields_is_rendered_as_text(self):
        response = self._post(dict(OFFER_FIELDS, candidateName="<b>Ada & Co</b>"))
        self.assertEqual(response.status_code, 200)

    @override_settings(HRPORTAL_FONT_FAMILY=MISSING_FONTS)
    def test_missing_font_returns_generic_error(self):
        response = self._post(OFFER_FIELDS)

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response["Content-Type"], "application/json")
        self.assertEqual(response.json(), {"success": False, "error": "Failed to generate offer letter"})

    def test_missing_footer_image_returns_generic_error(self):
        assets = OfferLetterAssets.from_settings()
        with override_settings(
            HRPORTAL_OFFER_ASSETS={
                "logo": assets.logo,
                "text_logo": assets.text_logo,
                "badge": assets.badge,
                "footer": "/nonexistent/footer.png",
            }
        ):
            response = self._post(OFFER_FIELDS)

        self.assertEqual(response.status_code, 500)
        self.assertFalse(response.content.startswith(b"%PDF-"))

    def test_malformed_body_returns_generic_error(self):
        response = self.client.post(reverse("offer_letter"), data="{not json", content_type="application/json")

        self.assertEqual(response.status_code, 500)
        self.assertFalse(response.json()["success"])


class LandingViewTests(SimpleTestCase):
    def test_get_landing_page(self):
        response = self.client.get(reverse("landing"))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "HR Management System")
        self.assertContains(response, 'name="candidateName"')
        self.assertContains(response, 'accept=".pdf,.doc,.docx"')
        self.assertContains(response, "validation-rules")


class ValidationTests(SimpleTestCase):
    def test_empty_application_reports_every_field(self):
        errors = validate_form(InternshipApplicationForm, {})

        self.assertEqual(set(errors), set(APPLICATION_FIELDS) | {"resume"})
        self.assertEqual(errors["firstName"], "First name is required")
        self.assertEqual(errors["resume"], "Resume is required")

    def test_valid_application_has_no_errors(self):
        self.assertEqual(validate_form(InternshipApplicationForm, APPLICATION_FIELDS, {"resume": _resume()}), {})

    def test_invalid_email(self):
        values = dict(APPLICATION_FIELDS, email="not-an-email")
        self.assertEqual(validate_field(InternshipApplicationForm, "email", values), "Invalid email")

    def test_resume_extension_is_checked(self):
        files = {"resume": _resume(name="cv.txt")}
        self.assertEqual(
            validate_field(InternshipApplicationForm, "resume", APPLICATION_FIELDS, files),
            "Resume must be a PDF, DOC or DOCX file.",
        )
        files = {"resume": _resume(name="cv.exe")}
        self.assertEqual(
            validate_field(InternshipApplicationForm, "resume", APPLICATION_FIELDS, files),
            "Executable files are not allowed.",
        )

    def test_offer_fields_are_all_required(self):
        errors = validate_form(OfferLetterForm, {})
        self.assertEqual(set(errors), set(OFFER_FIELDS))
        self.assertEqual(errors["reportingManager"], "Reporting manager is required")

    def test_client_rules(self):
        rules = client_rules(InternshipApplicationForm)
        self.assertEqual(rules["email"]["kind"], "email")
        self.assertEqual(rules["resume"], {"required": "Resume is required", "kind": "file", "accept": ".pdf,.doc,.docx"})


class FormControllerTests(SimpleTestCase):
    def _filled_application(self, submit):
        controller = FormController(InternshipApplicationForm, submit, "Failed to submit application")
        for name, value in APPLICATION_FIELDS.items():
            controller.set_value(name, value)
        controller.set_file("resume", _resume())
        return controller

    def test_empty_form_never_reaches_transport(self):
        submit = mock.Mock()
        controller = FormController(OfferLetterForm, submit)

        status = controller.submit()

        self.assertIs(status, SubmissionStatus.IDLE)
        submit.assert_not_called()
        self.assertEqual(set(controller.errors), set(OFFER_FIELDS))
        self.assertEqual(controller.touched, set(OFFER_FIELDS))

    def test_plain_file_handle_is_accepted(self):
        submit = mock.Mock(return_value={"success": True, "data": {}})
        controller = FormController(InternshipApplicationForm, submit)
        for name, value in APPLICATION_FIELDS.items():
            controller.set_value(name, value)

        with tempfile.NamedTemporaryFile(suffix=".pdf") as handle:
            handle.write(b"%PDF-1.4 resume")
            handle.flush()
            handle.seek(0)
            controller.set_file("resume", handle)

            self.assertIsNone(controller.blur("resume"))
            self.assertIs(controller.submit(), SubmissionStatus.SUCCEEDED)

        _, files = submit.call_args.args
        self.assertEqual(files["resume"].name, Path(handle.name).name)

    def test_plain_file_handle_with_wrong_extension_is_rejected(self):
        controller = FormController(InternshipApplicationForm, mock.Mock())

        with tempfile.NamedTemporaryFile(suffix=".txt") as handle:
            handle.write(b"plain text")
            handle.flush()
            controller.set_file("resume", handle)
            error = controller.blur("resume")

        self.assertEqual(error, "Resume must be a PDF, DOC or DOCX file.")

    def test_blur_validates_single_field(self):
        controller = FormController(OfferLetterForm, mock.Mock())

        self.assertEqual(controller.blur("position"), "Position is required")
        self.assertEqual(controller.errors, {"position": "Position is required"})
        controller.set_value("position", "Intern")
        self.assertIsNone(controller.blur("position"))
        self.assertEqual(controller.errors, {})

    def test_success_resets_values(self):
        submit = mock.Mock(return_value={"success": True, "data": {}})
        controller = self._filled_application(submit)

        status = controller.submit()

        self.assertIs(status, SubmissionStatus.SUCCEEDED)
        submit.assert_called_once()
        values, files = submit.call_args.args
        self.assertEqual(values, APPLICATION_FIELDS)
        self.assertEqual(files["resume"].name, "cv.pdf")
        self.assertTrue(all(value == "" for value in controller.values.values()))
        self.assertIsNone(controller.files["resume"])

    def test_server_failure_preserves_values(self):
        submit = mock.Mock(return_value={"success": False, "error": "Failed to process internship application"})
        controller = self._filled_application(submit)

        status = controller.submit()

        self.assertIs(status, SubmissionStatus.FAILED)
        self.assertEqual(controller.message, "Failed to process internship application")
        self.assertEqual(controller.values["firstName"], "Ada")

    def test_failure_without_message_uses_fallback(self):
        controller = self._filled_application(mock.Mock(return_value={"success": False}))
        controller.submit()
        self.assertEqual(controller.message, "Failed to submit application")

    def test_transport_exception_is_generic(self):
        controller = self._filled_application(mock.Mock(side_effect=RuntimeError("socket closed")))

        self.assertIs(controller.submit(), SubmissionStatus.FAILED)
        self.assertEqual(controller.message, UNEXPECTED_ERROR)

    def test_submit_while_submitting_is_ignored(self):
        submit = mock.Mock()
        controller = self._filled_application(submit)
        controller.status = SubmissionStatus.SUBMITTING

        self.assertFalse(controller.can_submit)
        self.assertIs(controller.submit(), SubmissionStatus.SUBMITTING)
        submit.assert_not_called()


class HRPortalClientTests(SimpleTestCase):
    def setUp(self):
        self.session = mock.Mock()
        self.client_api = HRPortalClient("http://hr.local/", session=self.session, timeout=5)

    def _response(self, *, ok=True, status_code=200, headers=None, content=b"", json_body=None):
        response = mock.Mock(ok=ok, status_code=status_code, headers=headers or {}, content=content)
        response.url = "http://hr.local/api"
        if json_body is None:
            response.json.side_effect = ValueError("no json")
        else:
            response.json.return_value = json_body
        return response

    def test_application_is_sent_as_multipart(self):
        self.session.post.return_value = self._response(json_body={"success": True, "data": {}})

        result = self.client_api.submit_internship_application(APPLICATION_FIELDS, _resume())

        self.assertTrue(result["success"])
        args, kwargs = self.session.post.call_args
        self.assertEqual(args[0], "http://hr.local/api/internship-application")
        self.assertEqual(kwargs["data"], APPLICATION_FIELDS)
        self.assertEqual(kwargs["files"]["resume"][0], "cv.pdf")
        self.assertEqual(kwargs["timeout"], 5)

    def test_offer_letter_returns_pdf_bytes(self):
        self.session.post.return_value = self._response(
            headers={
                "Content-Type": "application/pdf",
                "Content-Disposition": attachment_disposition("OfferLetter_Zoë.pdf"),
            },
            content=b"%PDF-1.4 letter",
        )

        result = self.client_api.generate_offer_letter(OFFER_FIELDS)

        self.assertEqual(result["data"]["filename"], "OfferLetter_Zoë.pdf")
        self.assertEqual(result["data"]["content"], b"%PDF-1.4 letter")
        self.assertEqual(self.session.post.call_args.kwargs["json"], OFFER_FIELDS)

    def test_offer_letter_failure_payload_is_passed_through(self):
        failure = {"success": False, "error": "Failed to generate offer letter"}
        self.session.post.return_value = self._response(
            ok=False, status_code=500, headers={"Content-Type": "application/json"}, json_body=failure
        )
        self.assertEqual(self.client_api.generate_offer_letter(OFFER_FIELDS), failure)

    def test_network_error_is_generic(self):
        self.session.post.side_effect = requests.ConnectionError("connection refused")

        self.assertEqual(
            self.client_api.generate_offer_letter(OFFER_FIELDS),
            {"success": False, "error": UNEXPECTED_ERROR},
        )
        self.assertEqual(
            self.client_api.submit_internship_application(APPLICATION_FIELDS, _resume()),
            {"success": False, "error": UNEXPECTED_ERROR},
        )

    def test_non_json_response_is_generic(self):
        self.session.post.return_value = self._response(ok=False, status_code=502)
        result = self.client_api.submit_internship_application(APPLICATION_FIELDS, _resume())
        self.assertEqual(result, {"success": False, "error": UNEXPECTED_ERROR})

    def test_save_offer_letter(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        result = {"success": True, "data": {"filename": "../OfferLetter_Ada.pdf", "content": b"%PDF-1.4"}}

        path = save_offer_letter(result, Path(tmp.name))

        self.assertEqual(path, Path(tmp.name) / "OfferLetter_Ada.pdf")
        self.assertEqual(path.read_bytes(), b"%PDF-1.4")

    def test_controllers_wire_forms_to_client(self):
        self.session.post.return_value = self._response(json_body={"success": True, "data": {}})
        controller = internship_application_controller(self.client_api)
        for name, value in APPLICATION_FIELDS.items():
            controller.set_value(name, value)
        controller.set_file("resume", _resume())

        self.assertIs(controller.submit(), SubmissionStatus.SUCCEEDED)
        self.assertIs(offer_letter_controller(self.client_api).form_class, OfferLetterForm)

    def test_application_controller_sends_opened_file(self):
        self.session.post.return_value = self._response(json_body={"success": True, "data": {}})
        controller = internship_application_controller(self.client_api)
        for name, value in APPLICATION_FIELDS.items():
            controller.set_value(name, value)

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "Ada Lovelace CV.pdf"
            path.write_bytes(b"%PDF-1.4 resume")
            with open(path, "rb") as handle:
                controller.set_file("resume", handle)
                status = controller.submit()

        self.assertIs(status, SubmissionStatus.SUCCEEDED)
        posted_name, posted_file, _ = self.session.post.call_args.kwargs["files"]["resume"]
        self.assertEqual(posted_name, "Ada Lovelace CV.pdf")
        self.assertIs(posted_file.file, handle)


class SchemaTests(SimpleTestCase):
    def test_application_round_trips_wire_keys(self):
        application = InternshipApplication.from_payload(APPLICATION_FIELDS)
        self.assertEqual(application.graduation_year, "2026")
        self.assertEqual(application.to_payload(), APPLICATION_FIELDS)

    def test_offer_letter_missing_keys_become_empty(self):
        offer = OfferLetter.from_payload({"candidateName": "Ada"})
        self.assertEqual(offer.candidate_name, "Ada")
        self.assertEqual(offer.reporting_manager, "")
