"""Pydantic models for data validation and structure."""

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from constants import DEFAULT_COMPLETION_SCORE, DEFAULT_DOCUMENT_TYPE, DEFAULT_RISK_LEVEL

RiskLevel = Literal["Low", "Medium", "High"]


class PartialFields(BaseModel):
    """Fields produced by one extractor or by the derivation pass.

    ``None`` means "not touched"; merging never overwrites a value with ``None``.
    """
    document_type: Optional[str] = None
    parties: Optional[List[str]] = None
    dates: Optional[Dict[str, str]] = None
    payment_terms: Optional[str] = None
    key_terms: Optional[List[str]] = None
    risk_level: Optional[RiskLevel] = None
    risk_factors: Optional[List[str]] = None
    concerning_points: Optional[List[str]] = None
    missing_clauses: Optional[List[str]] = None
    raw_score: Optional[float] = None
    completion_score: Optional[float] = None
    termination_clauses: Optional[List[str]] = None
    summary: Optional[str] = None

    def merge(self, other: "PartialFields") -> "PartialFields":
        """Return a new accumulator with every field ``other`` set laid over this one."""
        return self.model_copy(update=other.model_dump(exclude_none=True))


class AnalysisFields(BaseModel):
    """The normalized analysis record built from one model response."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    document_type: str = DEFAULT_DOCUMENT_TYPE
    risk_level: RiskLevel = DEFAULT_RISK_LEVEL
    risk_factors: List[str] = Field(default_factory=list)
    concerning_points: List[str] = Field(default_factory=list)
    completion_score: float = Field(default=DEFAULT_COMPLETION_SCORE, ge=0.0, le=1.0)
    missing_clauses: List[str] = Field(default_factory=list)
    key_terms: List[str] = Field(default_factory=list)
    termination_clauses: List[str] = Field(default_factory=list)
    parties: List[str] = Field(default_factory=list)
    dates: Dict[str, str] = Field(default_factory=dict)
    payment_terms: str = ""
    summary: str = ""


class ParseReport(BaseModel):
    """How much of a response the normalizer could actually read."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    sections_found: List[int] = Field(default_factory=list)
    explicit_risk_level: Optional[RiskLevel] = None
    explicit_score: Optional[float] = None
    degraded: bool = False
    error: Optional[str] = None


class ContractSummary(BaseModel):
    """Short summary block shown at the top of a result page."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    points: List[str] = Field(default_factory=list)
    contract_type: Optional[str] = None
    missing_or_ambiguous_terms: List[str] = Field(default_factory=list)


class AnalysisResult(BaseModel):
    """A complete analysis of one uploaded document."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    file_name: str
    file_size: Union[int, str]
    document_type: str
    analysis_date: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    risk_level: RiskLevel
    completion_score: float = Field(ge=0.0, le=1.0)
    summary: ContractSummary
    contract_type: Optional[str] = None
    document_text: Optional[str] = None
    parties: List[str] = Field(default_factory=list)
    key_terms: List[str] = Field(default_factory=list)
    important_dates: Dict[str, str] = Field(default_factory=dict)
    payment_terms: str = ""
    termination_clauses: List[str] = Field(default_factory=list)
    concerning_points: List[str] = Field(default_factory=list)
    risk_factors: List[str] = Field(default_factory=list)
    missing_elements: List[str] = Field(default_factory=list)
    overall_summary: str = ""

    @classmethod
    def from_fields(cls, fields: AnalysisFields, file_name: str, file_size: Union[int, str],
                    document_text: Optional[str] = None) -> "AnalysisResult":
        return cls(
            file_name=file_name,
            file_size=file_size,
            document_type=fields.document_type,
            risk_level=fields.risk_level,
            completion_score=fields.completion_score,
            summary=ContractSummary(
                points=list(fields.key_terms),
                contract_type=fields.document_type,
                missing_or_ambiguous_terms=list(fields.missing_clauses),
            ),
            contract_type=fields.document_type,
            document_text=document_text,
            parties=list(fields.parties),
            key_terms=list(fields.key_terms),
            important_dates=dict(fields.dates),
            payment_terms=fields.payment_terms,
            termination_clauses=list(fields.termination_clauses),
            concerning_points=list(fields.concerning_points),
            risk_factors=list(fields.risk_factors),
            missing_elements=list(fields.missing_clauses),
            overall_summary=fields.summary,
        )
