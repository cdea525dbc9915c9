from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from codelens.constants import DEFAULT_DETAIL, DEFAULT_FOCUS, MAX_SCORE, MIN_SCORE


def clamp_score(score: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, int(score)))


class ModelInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Human-readable model name.")
    description: str = Field("", description="Short description of the model.")
    cost_per_request: float = Field(0.0, description="Illustrative cost of one request.")
    max_tokens: int = Field(4096, description="Context window of the model.")
    supports_streaming: bool = Field(True, description="Whether the model can stream replies.")


class ProviderDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    cost_per_request: float
    max_tokens: int
    supports_streaming: bool
    available_models: Dict[str, ModelInfo] = Field(default_factory=dict)


class AnalysisOptions(BaseModel):
    model: Optional[str] = Field(None, description="Model id; the backend default is used when unset.")
    focus: str = Field(DEFAULT_FOCUS, description="Area the review should focus on.")
    detail: str = Field(DEFAULT_DETAIL, description="Requested level of detail.")


class AnalysisRequest(BaseModel):
    code: str = Field(..., min_length=1, description="The code snippet to be analyzed.")
    options: AnalysisOptions = Field(default_factory=AnalysisOptions)


class AnalysisReport(BaseModel):
    """Structured result of one analysis attempt."""

    model_config = ConfigDict(protected_namespaces=())

    status: Literal["success", "error"]
    provider: str
    model: Optional[str] = None
    model_name: Optional[str] = None
    analysis_text: Optional[str] = None
    suggestions: List[str] = Field(default_factory=list)
    score: int = MIN_SCORE
    cost: float = 0.0
    tokens_used: int = 0
    response_time_ms: Optional[int] = None
    local: bool = False
    message: Optional[str] = None
    # Only set when a save was requested for a successful report.
    saved: Optional[bool] = None
    analysis_id: Optional[int] = None

    @field_validator("score", mode="before")
    @classmethod
    def _clamp_score(cls, value):
        return clamp_score(value)

    @model_validator(mode="after")
    def _check_outcome(self):
        if self.status == "success":
            if self.analysis_text is None or self.message is not None:
                raise ValueError("a successful report carries analysis_text and no message")
        elif self.message is None or self.analysis_text is not None:
            raise ValueError("an error report carries a message and no analysis_text")
        return self

    @classmethod
    def failure(cls, provider: str, message: str, model: Optional[str] = None) -> "AnalysisReport":
        return cls(status="error", provider=provider, model=model, message=message)


class AnalysisRecord(BaseModel):
    """Fields handed to the persistence sink for one stored analysis."""

    code: str = Field(..., min_length=1)
    analysis: str = Field(..., min_length=1)
    suggestions: List[str] = Field(default_factory=list)
    score: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE)
    file_name: str = Field("Untitled Analysis", max_length=255)
    provider: str = "gemini"
    model: Optional[str] = None
    cost: Optional[float] = None
    tokens_used: Optional[int] = None

    @classmethod
    def from_report(cls, code: str, report: AnalysisReport, file_name: Optional[str] = None) -> "AnalysisRecord":
        return cls(
            code=code,
            analysis=report.analysis_text or "",
            suggestions=report.suggestions,
            score=report.score,
            file_name=file_name or "Untitled Analysis",
            provider=report.provider,
            model=report.model,
            cost=report.cost,
            tokens_used=report.tokens_used,
        )
