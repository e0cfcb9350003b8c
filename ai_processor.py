import os
import logging
from langchain_community.document_loaders import PyMuPDFLoader
from langchain_core.prompts import PromptTemplate
from langchain_openai import ChatOpenAI

# Import configuration
from config import (
    OPENAI_API_KEY, ANALYSIS_MODEL, ANALYSIS_TEMPERATURE,
    ANALYSIS_MAX_TOKENS, MAX_DOCUMENT_CHARS
)
from constants import ANALYSIS_PROMPT_TEMPLATE
from normalizer import normalize_analysis_response
from schemas import AnalysisResult
from utils import get_file_extension, strip_code_fences

logger = logging.getLogger(__name__)

ANALYSIS_PROMPT = PromptTemplate(
    template=ANALYSIS_PROMPT_TEMPLATE,
    input_variables=["document_text"],
)

# Built on first use so that importing this module needs no API key
_analysis_llm = None


def get_analysis_llm():
    """Return the shared chat model used for document analysis."""
    global _analysis_llm
    if _analysis_llm is None:
        if not OPENAI_API_KEY:
            raise RuntimeError("OPENAI_API_KEY not configured. Cannot run document analysis.")
        _analysis_llm = ChatOpenAI(
            openai_api_key=OPENAI_API_KEY,
            model=ANALYSIS_MODEL,
            temperature=ANALYSIS_TEMPERATURE,
            max_tokens=ANALYSIS_MAX_TOKENS,
        )
    return _analysis_llm


# --- HELPER FUNCTIONS FOR ANALYSIS ---

def extract_document_text(filepath):
    """Read the text content of an uploaded PDF or plain-text document."""
    extension = get_file_extension(filepath)
    if extension == "pdf":
        documents = PyMuPDFLoader(filepath).load()
        return " ".join(doc.page_content for doc in documents)
    if extension == "txt":
        with open(filepath, encoding="utf-8", errors="replace") as handle:
            return handle.read()
    raise ValueError(f"Unsupported file type: '{extension or filepath}'")


def build_analysis_prompt(document_text):
    """Render the nine-section analysis prompt for a document."""
    if len(document_text) > MAX_DOCUMENT_CHARS:
        logger.warning(f"Document truncated from {len(document_text)} to {MAX_DOCUMENT_CHARS} characters")
        document_text = document_text[:MAX_DOCUMENT_CHARS]
    return ANALYSIS_PROMPT.format(document_text=document_text)


def _message_text(message):
    content = getattr(message, "content", message)
    if isinstance(content, list):
        # Multi-part messages carry text blocks alongside other content
        return "".join(
            part.get("text", "") if isinstance(part, dict) else str(part)
            for part in content
        )
    return str(content)


# --- MAIN PUBLIC FUNCTIONS ---

def analyze_document_text(document_text, llm=None):
    """Ask the model for the nine-section analysis and normalize its answer."""
    if not document_text or not document_text.strip():
        raise ValueError("The document contains no extractable text.")

    llm = llm or get_analysis_llm()
    prompt = build_analysis_prompt(document_text)

    logger.info("Requesting document analysis")
    response_text = strip_code_fences(_message_text(llm.invoke(prompt)))
    fields = normalize_analysis_response(response_text)
    logger.info(f"Analysis complete: {fields.document_type}, risk {fields.risk_level}")
    return fields


def analyze_document(filepath, file_name=None, llm=None):
    """Orchestrates text extraction, model analysis and result assembly for one file."""
    logger.info(f"Starting document analysis for: {filepath}")

    document_text = extract_document_text(filepath)
    fields = analyze_document_text(document_text, llm=llm)

    return AnalysisResult.from_fields(
        fields,
        file_name=file_name or os.path.basename(filepath),
        file_size=os.path.getsize(filepath),
        document_text=document_text,
    )
