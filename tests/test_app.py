"""Tests for the Flask API endpoints."""

import io
import os

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from werkzeug.datastructures import FileStorage

import ai_processor
import app as app_module
import utils


@pytest.fixture
def client():
    app_module.app.config["TESTING"] = True
    with app_module.app.test_client() as client:
        yield client


@pytest.fixture
def fake_analysis(monkeypatch, full_response):
    """Route uploads through the real workflow with a fake chat model."""
    seen = {}

    def analyze(filepath, file_name=None):
        seen["filepath"] = filepath
        llm = FakeListChatModel(responses=[full_response])
        return ai_processor.analyze_document(filepath, file_name=file_name, llm=llm)

    monkeypatch.setattr(app_module, "analyze_document", analyze)
    return seen


def _upload(client, content, filename):
    return client.post(
        "/analyze",
        data={"file": (io.BytesIO(content), filename)},
        content_type="multipart/form-data",
    )


class TestPing:

    def test_ping(self, client):
        response = client.get("/ping")

        assert response.status_code == 200
        assert response.get_json()["status"] == "ok"


class TestNormalizeEndpoint:

    def test_normalizes_raw_response(self, client, full_response):
        response = client.post("/normalize", json={"response": full_response})
        body = response.get_json()

        assert response.status_code == 200
        assert body["analysis"]["documentType"] == "Employment Agreement"
        assert body["analysis"]["paymentTerms"].count(" || ") == 1
        assert body["report"]["sectionsFound"] == list(range(1, 10))
        assert body["report"]["degraded"] is False

    def test_unstructured_response_is_flagged(self, client):
        body = client.post("/normalize", json={"response": "nothing useful"}).get_json()

        assert body["analysis"]["riskLevel"] == "Medium"
        assert body["report"]["degraded"] is True

    @pytest.mark.parametrize("payload", [{}, {"response": 42}, ["not", "an", "object"]])
    def test_rejects_missing_response(self, client, payload):
        response = client.post("/normalize", json=payload)

        assert response.status_code == 400
        assert "error" in response.get_json()


class TestAnalyzeEndpoint:

    def test_analyzes_uploaded_text_file(self, client, fake_analysis):
        response = _upload(client, b"This lease is between Landlord and Tenant.", "contract.txt")
        body = response.get_json()

        assert response.status_code == 200
        assert body["fileName"] == "contract.txt"
        assert body["documentType"] == "Employment Agreement"
        assert body["riskLevel"] == "Medium"
        assert body["documentText"] == "This lease is between Landlord and Tenant."
        assert not os.path.exists(fake_analysis["filepath"])

    def test_requires_file_part(self, client):
        response = client.post("/analyze")

        assert response.status_code == 400

    def test_rejects_unsupported_file_type(self, client, fake_analysis):
        response = _upload(client, b"data", "contract.docx")

        assert response.status_code == 400
        assert "Invalid file type" in response.get_json()["error"]
        assert fake_analysis == {}

    def test_empty_document_is_a_client_error(self, client, fake_analysis):
        response = _upload(client, b"   ", "blank.txt")

        assert response.status_code == 400

    def test_processing_failure_is_a_server_error(self, client, monkeypatch):
        def analyze(filepath, file_name=None):
            raise RuntimeError("model unavailable")

        monkeypatch.setattr(app_module, "analyze_document", analyze)
        response = _upload(client, b"Some contract", "contract.txt")

        assert response.status_code == 500
        assert "model unavailable" in response.get_json()["error"]


class TestValidateUpload:

    def test_accepts_pdf(self):
        file = FileStorage(stream=io.BytesIO(b"%PDF"), filename="contract.pdf")

        assert utils.validate_upload(file) == (True, "")

    def test_rejects_oversized_file(self, monkeypatch):
        monkeypatch.setattr(utils, "MAX_FILE_SIZE", 5)
        file = FileStorage(stream=io.BytesIO(b"0123456789"), filename="contract.txt")

        is_valid, message = utils.validate_upload(file)

        assert is_valid is False
        assert "too large" in message

    def test_size_check_does_not_consume_stream(self):
        file = FileStorage(stream=io.BytesIO(b"contract"), filename="contract.txt")
        utils.validate_upload(file)

        assert file.stream.read() == b"contract"
