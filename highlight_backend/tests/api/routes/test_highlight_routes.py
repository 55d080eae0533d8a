from unittest.mock import patch

import pymupdf
import pytest
from fastapi.testclient import TestClient

from highlight_backend.app.api.main import create_app
from highlight_backend.app.api.models import BLANK_PHRASE_MESSAGE
from highlight_backend.app.api.routes.highlight_routes import limiter
from highlight_backend.app.domain.exceptions import DocumentExtractionError

client = TestClient(create_app())

ROUTES_PATH = "highlight_backend.app.api.routes.highlight_routes"


def _pdf_bytes(*lines):
    doc = pymupdf.open()
    for line in lines:
        doc.new_page().insert_text((72, 100), line, fontsize=12)
    data = doc.tobytes()
    doc.close()
    return data


def _page_payload(page_index, words):
    fragments = []
    x = 100.0
    for word in words:
        fragments.append({"content": word, "origin_x": x, "origin_y": 700.0, "width": 40.0, "height": 12.0})
        x += 45.0
    return {"page_index": page_index, "full_text": " ".join(words), "fragments": fragments}


@pytest.fixture(autouse=True)
def reset_limiter():
    limiter.reset()
    yield


class TestHighlightLocateRoute:

    # a phrase in the supplied pages returns the highlight
    def test_locate_success(self):
        payload = {
            "phrase": "Revenue 12.8",
            "identifier": "ref-1",
            "page_hint": 1,
            "pages": [_page_payload(0, ["Revenue", "12.8"]), _page_payload(1, ["Revenue", "12.8", "billion"])],
        }

        response = client.post("/highlight/locate", json=payload)

        assert response.status_code == 200

        body = response.json()

        assert body["identifier"] == "ref-1"

        assert body["page_index"] == 1

        assert body["approximate"] is False

        assert body["rects"] == [{"x": 100.0, "y": 700.0, "width": 85.0, "height": 12.0}]

    # missing pages may be sent as null
    def test_locate_with_null_pages(self):
        payload = {"phrase": "Revenue 12.8", "identifier": "ref-2",
                   "pages": [None, _page_payload(1, ["Revenue", "12.8"])]}

        response = client.post("/highlight/locate", json=payload)

        assert response.status_code == 200

        assert response.json()["page_index"] == 1

    # a phrase on no page returns 404 with a message
    def test_locate_not_found(self):
        payload = {"phrase": "Dividend policy", "identifier": "ref-3", "pages": [_page_payload(0, ["Revenue"])]}

        response = client.post("/highlight/locate", json=payload)

        assert response.status_code == 404

        body = response.json()

        assert body["status"] == "not_found"

        assert body["identifier"] == "ref-3"

        assert body["message"] == "The referenced phrase could not be found in this document."

    # request validation rejects an empty phrase
    def test_locate_empty_phrase(self):
        response = client.post("/highlight/locate", json={"phrase": "", "identifier": "ref-4", "pages": []})

        assert response.status_code == 422

    # a whitespace-only phrase is rejected as well
    def test_locate_blank_phrase(self):
        payload = {"phrase": "   ", "identifier": "ref-12", "pages": [_page_payload(0, ["Revenue"])]}

        response = client.post("/highlight/locate", json=payload)

        assert response.status_code == 422

    # engine failures are returned as sanitized errors
    @patch(f"{ROUTES_PATH}.HighlightService.locate", side_effect=RuntimeError("engine failure"))
    def test_locate_error(self, mock_locate):
        payload = {"phrase": "Revenue", "identifier": "ref-5", "pages": []}

        with patch(f"{ROUTES_PATH}.SecurityAwareErrorHandler.handle_safe_error") as mock_safe_error:
            mock_safe_error.return_value = {
                "status": "error",
                "error": "Internal error",
                "error_id": "mock_id",
                "status_code": 500,
            }
            response = client.post("/highlight/locate", json=payload)

        assert response.status_code == 500

        assert response.json()["error_id"] == "mock_id"

        mock_safe_error.assert_called_once()


class TestHighlightPdfRoute:

    # the one-based page number biases the search
    def test_pdf_success(self):
        pdf = _pdf_bytes("Revenue 12.8 billion", "Revenue 12.8 billion")

        response = client.post(
            "/highlight/pdf",
            files={"file": ("report.pdf", pdf, "application/pdf")},
            data={"phrase": "Revenue 12.8", "identifier": "ref-6", "page_number": "2"},
        )

        assert response.status_code == 200

        body = response.json()

        assert body["page_index"] == 1

        assert body["identifier"] == "ref-6"

        assert body["approximate"] is False

    # without a page number the first matching page wins
    def test_pdf_without_page_number(self):
        pdf = _pdf_bytes("Introduction", "Revenue 12.8 billion")

        response = client.post(
            "/highlight/pdf",
            files={"file": ("report.pdf", pdf, "application/pdf")},
            data={"phrase": "Revenue 12.8", "identifier": "ref-7"},
        )

        assert response.status_code == 200

        assert response.json()["page_index"] == 1

    # a phrase missing from the PDF returns 404
    def test_pdf_not_found(self):
        pdf = _pdf_bytes("Introduction")

        response = client.post(
            "/highlight/pdf",
            files={"file": ("report.pdf", pdf, "application/pdf")},
            data={"phrase": "Dividend policy", "identifier": "ref-8"},
        )

        assert response.status_code == 404

        assert response.json()["status"] == "not_found"

    # non PDF uploads are rejected
    def test_pdf_wrong_type(self):
        response = client.post(
            "/highlight/pdf",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            data={"phrase": "hello", "identifier": "ref-9"},
        )

        assert response.status_code == 415

        assert response.json()["detail"] == "Only PDF files are supported"

    # uploads without a PDF header are rejected
    def test_pdf_invalid_header(self):
        response = client.post(
            "/highlight/pdf",
            files={"file": ("fake.pdf", b"not a pdf at all", "application/pdf")},
            data={"phrase": "hello", "identifier": "ref-10"},
        )

        assert response.status_code == 415

        assert response.json()["detail"] == "Invalid PDF header"

    # an unreadable PDF body is reported as unprocessable
    @patch("highlight_backend.app.utils.system_utils.error_handling.SecurityAwareErrorHandler._log_detailed_error")
    @patch("highlight_backend.app.services.highlight_service.PDFTextExtractor",
           side_effect=DocumentExtractionError("Could not open PDF document"))
    def test_pdf_broken_document(self, mock_extractor, mock_detailed_log):
        response = client.post(
            "/highlight/pdf",
            files={"file": ("broken.pdf", b"%PDF-1.7\nthis is not really a pdf", "application/pdf")},
            data={"phrase": "hello", "identifier": "ref-11"},
        )

        assert response.status_code == 422

        body = response.json()

        assert body["status"] == "error"

        assert body["error_type"] == "DocumentExtractionError"

        assert "error_id" in body

    # a whitespace-only phrase is rejected before the upload is read
    @patch(f"{ROUTES_PATH}.HighlightService.locate_in_pdf")
    def test_pdf_blank_phrase(self, mock_locate_in_pdf):
        response = client.post(
            "/highlight/pdf",
            files={"file": ("report.pdf", _pdf_bytes("Revenue"), "application/pdf")},
            data={"phrase": "   ", "identifier": "ref-13"},
        )

        assert response.status_code == 422

        assert response.json()["detail"] == BLANK_PHRASE_MESSAGE

        mock_locate_in_pdf.assert_not_called()
