"""
Normalizer for the nine-section analysis response.

The model is asked (see ``constants.ANALYSIS_PROMPT_TEMPLATE``) to answer in
nine numbered sections. This module turns that free text into an
``AnalysisFields`` record in four stages:

1. segment the response on ``N.`` markers
2. run one independent extractor per numbered section
3. derive risk level, completion score and termination clauses
4. assemble the frozen record over the defaults

Malformed input never raises; the worst case is the all-default record.
"""
import logging
import re
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from constants import (
    COMPLETION_EXPECTED_FIELDS,
    CONCERNING_POINTS_ESCALATION,
    DEFAULT_RISK_LEVEL,
    HIGH_RISK_FACTOR_COUNT,
    MEDIUM_RISK_FACTOR_COUNT,
    MISSING_CLAUSE_PENALTY,
    PAYMENT_TERMS_SEPARATOR,
    SECTION_TITLES,
    TERMINATION_KEYWORDS,
)
from schemas import AnalysisFields, ParseReport, PartialFields

logger = logging.getLogger(__name__)

# "N." followed by a heading starts a section. Decimals like 0.85 and a
# year closing a list item ("2024.\n") do not.
_SECTION_BOUNDARY_RE = re.compile(r"(?<!\d)(?=\d+\.(?!\d)[ \t]*[*#_]*[ \t]*[A-Za-z])")
_SECTION_TAG_RE = re.compile(r"^(\d+)\.(?!\d)\s*")
# A bare "N." alone on its line, with the heading or bullets below it
_BARE_SECTION_TAG_RE = re.compile(r"^[ \t]*(\d+)\.[ \t]*$", re.MULTILINE)

# "**" opens a bold heading, not a bullet
_BULLET_RE = re.compile(r"^(?:-|\*(?!\*))\s*")
_INLINE_BULLET_RE = re.compile(r"\s+(?=(?:-|\*(?!\*))\s)")

_DOCUMENT_TYPE_PATTERNS = (
    re.compile(r"Type:\s*([^\n]+)", re.IGNORECASE),
    re.compile(r"Document Type:\s*([^\n]+)", re.IGNORECASE),
    re.compile(r"Type\s*:\s*([^\n]+)", re.IGNORECASE),
    re.compile(r"Document\s+Type\s+and\s+Purpose\s*:[ \t]*([^\n]+)", re.IGNORECASE),
)
_AND_PURPOSE_RE = re.compile(r"\s*\band\s+Purpose\b\s*(?::.*)?$", re.IGNORECASE)
_PURPOSE_RE = re.compile(r"\s*(?:-\s*)?\bPurpose\b\s*(?::.*)?$", re.IGNORECASE)
_PARENTHETICAL_RE = re.compile(r"\s*\([^)]*\)")
_TRAILING_PUNCTUATION_RE = re.compile(r"[\s:;,.\-]+$")

_PAYMENT_PREFIX_RE = re.compile(r"^(?:[-*]\s*|\d+\.(?!\d)\s*)+")

_RISK_LEVEL_RE = re.compile(r"Risk\s+Level\s*\**\s*:\s*\**\s*(High|Medium|Low)\b", re.IGNORECASE)
_RISK_FACTORS_RE = re.compile(r"Risk Factors:?")
_CONCERNING_RE = re.compile(r"Concerning Elements:?")

_SCORE_PATTERNS = (
    re.compile(r"Score:\s*(\d+(?:\.\d+)?)", re.IGNORECASE),
    re.compile(r"Score\s*:\s*(\d+(?:\.\d+)?)", re.IGNORECASE),
    re.compile(r"(?<![\w.])(\d+(?:\.\d+)?)(?!\w)(?!\.\d)"),
    re.compile(r"(\d+\.\d+)"),
)


# --- SEGMENTER ---

def segment_response(raw_response: str) -> List[str]:
    """Split a raw response into sections, each starting at its ``N.`` tag.

    Never returns an empty list: text without any marker comes back whole.
    """
    raw_response = raw_response or ""
    starts = {match.start() for match in _SECTION_BOUNDARY_RE.finditer(raw_response)}
    starts.update(match.start(1) for match in _BARE_SECTION_TAG_RE.finditer(raw_response))
    bounds = sorted(starts | {0}) + [len(raw_response)]
    sections = [raw_response[start:end] for start, end in zip(bounds, bounds[1:]) if end > start]
    return sections or [raw_response]


def section_number(section_text: str) -> Optional[int]:
    match = _SECTION_TAG_RE.match(section_text.strip())
    return int(match.group(1)) if match else None


def _section_body(section_text: str) -> str:
    return _SECTION_TAG_RE.sub("", section_text.strip(), count=1)


def _is_collapsed(body: str) -> bool:
    """True when the model put a whole section on one line."""
    return "\n" not in body.strip()


def _section_items(section_text: str) -> List[str]:
    body = _section_body(section_text)
    return extract_list_items(body, collapsed=_is_collapsed(body))


# --- SHARED PRIMITIVES ---

def extract_list_items(text: str, collapsed: bool = False) -> List[str]:
    """
    Return the bullet items of a block of text, in order.

    A line counts only if it starts with ``-`` or ``*``; the marker and the
    whitespace after it are removed. With ``collapsed`` set (a section the
    model put on one line, "- a - b - c") the text is first broken apart at
    its inline markers.
    """
    if collapsed:
        text = _INLINE_BULLET_RE.sub("\n", text.strip())
    lines = text.splitlines()

    items = []
    for line in lines:
        line = line.strip()
        if not _BULLET_RE.match(line):
            continue
        item = _BULLET_RE.sub("", line, count=1).strip()
        if item:
            items.append(item)
    return items


def clean_document_type(value: str) -> str:
    value = _AND_PURPOSE_RE.sub("", value)
    value = _PURPOSE_RE.sub("", value)
    value = _PARENTHETICAL_RE.sub("", value)
    value = value.replace("*", "").strip().strip("\"'`")
    return _TRAILING_PUNCTUATION_RE.sub("", value).strip()


def normalize_score(value: float) -> float:
    """Bring a score stated on a 0-1, 0-10 or 0-100 scale onto 0-1."""
    if 0 <= value <= 1:
        score = value
    elif 1 < value <= 10:
        score = value / 10
    elif 10 < value <= 100:
        score = value / 100
    else:
        score = value / 10
    return _clamp(score)


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


# --- FIELD EXTRACTORS ---

def extract_document_type(section_text: str) -> PartialFields:
    body = _section_body(section_text)
    for pattern in _DOCUMENT_TYPE_PATTERNS:
        match = pattern.search(body)
        if match:
            document_type = clean_document_type(match.group(1))
            if document_type:
                return PartialFields(document_type=document_type)
            break
    return PartialFields()


def extract_parties(section_text: str) -> PartialFields:
    return PartialFields(parties=_section_items(section_text))


def extract_dates(section_text: str) -> PartialFields:
    dates = {}
    for item in _section_items(section_text):
        label, separator, value = item.partition(":")
        label, value = label.strip(), value.strip()
        if separator and label and value:
            dates[label] = value
    return PartialFields(dates=dates)


def extract_payment_terms(section_text: str) -> PartialFields:
    items = [_PAYMENT_PREFIX_RE.sub("", item).strip()
             for item in _section_items(section_text)]
    return PartialFields(payment_terms=PAYMENT_TERMS_SEPARATOR.join(item for item in items if item))


def extract_key_terms(section_text: str) -> PartialFields:
    return PartialFields(key_terms=_section_items(section_text))


def extract_risk_assessment(section_text: str) -> PartialFields:
    """
    Read the risk section. The explicit level, the risk factors and the
    concerning elements are looked up independently of each other.
    """
    body = _section_body(section_text)
    collapsed = _is_collapsed(body)
    fields = {}

    level_match = _RISK_LEVEL_RE.search(body)
    if level_match:
        fields["risk_level"] = level_match.group(1).capitalize()

    concerning_match = _CONCERNING_RE.search(body)
    factors_match = _RISK_FACTORS_RE.search(body)
    if factors_match:
        end = None
        if concerning_match and concerning_match.start() >= factors_match.end():
            end = concerning_match.start()
        fields["risk_factors"] = extract_list_items(body[factors_match.end():end], collapsed)

    if concerning_match:
        fields["concerning_points"] = extract_list_items(body[concerning_match.end():], collapsed)

    return PartialFields(**fields)


def extract_missing_clauses(section_text: str) -> PartialFields:
    return PartialFields(missing_clauses=_section_items(section_text))


def extract_completion_score(section_text: str) -> PartialFields:
    body = _section_body(section_text)
    for pattern in _SCORE_PATTERNS:
        match = pattern.search(body)
        if match:
            return PartialFields(raw_score=float(match.group(1)))
    return PartialFields()


def extract_summary(section_text: str) -> PartialFields:
    return PartialFields(summary=" ".join(_section_items(section_text)))


SECTION_EXTRACTORS: Dict[int, Callable[[str], PartialFields]] = {
    1: extract_document_type,
    2: extract_parties,
    3: extract_dates,
    4: extract_payment_terms,
    5: extract_key_terms,
    6: extract_risk_assessment,
    7: extract_missing_clauses,
    8: extract_completion_score,
    9: extract_summary,
}


def extract_sections(sections: Iterable[str]) -> Tuple[PartialFields, List[int]]:
    """Run the matching extractor over each section, in document order.

    Returns the merged fields and the section numbers that were recognized.
    A repeated section number overwrites what the earlier one extracted.
    """
    partial = PartialFields()
    seen = []
    for section in sections:
        number = section_number(section)
        extractor = SECTION_EXTRACTORS.get(number)
        if extractor is None:
            continue
        logger.debug(f"Extracting section {number} ({SECTION_TITLES[number]})")
        partial = partial.merge(extractor(section))
        seen.append(number)
    return partial, seen


# --- DERIVATION PASS ---

def resolve_risk_level(explicit_level: Optional[str], risk_factors: List[str],
                       concerning_points: List[str], has_risk_factors: bool) -> str:
    if explicit_level:
        risk_level = explicit_level
    elif has_risk_factors:
        if len(risk_factors) > HIGH_RISK_FACTOR_COUNT:
            risk_level = "High"
        elif len(risk_factors) > MEDIUM_RISK_FACTOR_COUNT:
            risk_level = "Medium"
        else:
            risk_level = "Low"
    else:
        risk_level = DEFAULT_RISK_LEVEL

    # Many red flags can only raise the level
    if len(concerning_points) > CONCERNING_POINTS_ESCALATION and risk_level != "High":
        risk_level = "High"
    return risk_level


def fallback_completion_score(partial: PartialFields) -> float:
    """Estimate completeness from which fields were filled when no score was stated."""
    present = [
        bool(partial.parties),
        bool(partial.dates),
        bool(partial.key_terms),
        bool(partial.risk_factors),
        bool(partial.payment_terms),
        bool(partial.summary),
    ]
    missing_count = len(partial.missing_clauses or [])
    score = sum(present) / COMPLETION_EXPECTED_FIELDS - missing_count * MISSING_CLAUSE_PENALTY
    return _clamp(score)


def is_termination_clause(term: str) -> bool:
    lowered = term.lower()
    return any(keyword in lowered for keyword in TERMINATION_KEYWORDS)


def derive_fields(partial: PartialFields) -> PartialFields:
    """Compute the fields inferred from the extracted ones.

    Runs after every extractor so that it always sees the final risk factors,
    key terms and missing clauses whatever order the sections came in.
    """
    risk_level = resolve_risk_level(
        partial.risk_level,
        partial.risk_factors or [],
        partial.concerning_points or [],
        partial.risk_factors is not None,
    )
    if partial.raw_score is not None:
        completion_score = normalize_score(partial.raw_score)
    else:
        completion_score = fallback_completion_score(partial)
    termination_clauses = [term for term in partial.key_terms or [] if is_termination_clause(term)]

    return partial.merge(PartialFields(
        risk_level=risk_level,
        completion_score=completion_score,
        termination_clauses=termination_clauses,
    ))


# --- ASSEMBLER ---

def assemble(partial: PartialFields) -> AnalysisFields:
    values = partial.model_dump(exclude_none=True, exclude={"raw_score"})
    return AnalysisFields(**values)


# --- MAIN PUBLIC FUNCTIONS ---

def parse_analysis_response(raw_response: str) -> Tuple[AnalysisFields, ParseReport]:
    """
    Normalize a model response and report how much of it could be read.

    Any failure inside the pipeline yields the all-default record together
    with a report flagged as degraded; nothing is raised to the caller.
    """
    try:
        sections = segment_response(raw_response)
        partial, seen = extract_sections(sections)
        if not seen:
            logger.warning("No numbered sections found in analysis response")
            return AnalysisFields(), ParseReport(degraded=True)

        fields = assemble(derive_fields(partial))
        report = ParseReport(
            sections_found=sorted(set(seen)),
            explicit_risk_level=partial.risk_level,
            explicit_score=partial.raw_score,
        )
        logger.info(f"Normalized analysis response with sections {report.sections_found}")
        return fields, report

    except Exception as e:
        logger.error(f"Failed to normalize analysis response: {str(e)}")
        return AnalysisFields(), ParseReport(degraded=True, error=str(e))


def normalize_analysis_response(raw_response: str) -> AnalysisFields:
    """Turn a raw nine-section model response into an ``AnalysisFields`` record."""
    fields, _ = parse_analysis_response(raw_response)
    return fields
