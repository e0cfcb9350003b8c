"""Tests for the document analysis workflow, with a fake chat model."""

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

import ai_processor
from ai_processor import (
    analyze_document,
    analyze_document_text,
    build_analysis_prompt,
    extract_document_text,
)


@pytest.fixture
def fake_llm(full_response):
    return FakeListChatModel(responses=[full_response])


@pytest.fixture
def contract_file(tmp_path):
    path = tmp_path / "contract.txt"
    path.write_text("This Employment Agreement is made between Acme Corp and Jane Doe.", encoding="utf-8")
    return path


class TestPrompt:

    def test_prompt_contains_template_and_document(self):
        prompt = build_analysis_prompt("The tenant shall pay rent.")

        assert "1. Document Type and Purpose:" in prompt
        assert "9. Plain English Summary:" in prompt
        assert prompt.rstrip().endswith("The tenant shall pay rent.")

    def test_long_documents_are_truncated(self, monkeypatch):
        monkeypatch.setattr(ai_processor, "MAX_DOCUMENT_CHARS", 10)
        prompt = build_analysis_prompt("0123456789ABCDEF")

        assert "0123456789" in prompt
        assert "ABCDEF" not in prompt


class TestExtractDocumentText:

    def test_reads_text_files(self, contract_file):
        assert "Acme Corp" in extract_document_text(str(contract_file))

    def test_rejects_unsupported_types(self, tmp_path):
        path = tmp_path / "contract.docx"
        path.write_bytes(b"binary")

        with pytest.raises(ValueError):
            extract_document_text(str(path))


class TestAnalyzeDocument:

    def test_analyze_document_text(self, fake_llm):
        fields = analyze_document_text("Some contract", llm=fake_llm)

        assert fields.document_type == "Employment Agreement"
        assert fields.risk_level == "Medium"
        assert fields.completion_score == pytest.approx(0.8)

    def test_code_fences_are_stripped(self, full_response):
        llm = FakeListChatModel(responses=["```\n" + full_response + "\n```"])
        fields = analyze_document_text("Some contract", llm=llm)

        assert fields.parties == ["Acme Corp (Employer)", "Jane Doe (Employee)"]

    def test_unparseable_answer_yields_defaults(self):
        llm = FakeListChatModel(responses=["I cannot analyze this document."])
        fields = analyze_document_text("Some contract", llm=llm)

        assert fields.document_type == "Document"
        assert fields.completion_score == 0.5

    def test_empty_document_is_rejected(self, fake_llm):
        with pytest.raises(ValueError):
            analyze_document_text("   ", llm=fake_llm)

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr(ai_processor, "OPENAI_API_KEY", None)
        monkeypatch.setattr(ai_processor, "_analysis_llm", None)

        with pytest.raises(RuntimeError):
            analyze_document_text("Some contract")

    def test_analyze_document_builds_result(self, contract_file, fake_llm):
        result = analyze_document(str(contract_file), llm=fake_llm)

        assert result.file_name == "contract.txt"
        assert result.file_size == contract_file.stat().st_size
        assert result.document_text.startswith("This Employment Agreement")
        assert result.termination_clauses == ["Early termination allowed with 30 days notice"]

    def test_analyze_document_uses_given_file_name(self, contract_file, fake_llm):
        result = analyze_document(str(contract_file), file_name="Original Name.txt", llm=fake_llm)

        assert result.file_name == "Original Name.txt"
