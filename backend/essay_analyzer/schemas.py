from __future__ import annotations
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

LIKELIHOODS = ("low", "medium", "high")


class AnalysisRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True, frozen=True)

	essay: str
	essay_type: str = Field(alias="essayType")


class AIDetection(BaseModel):
	model_config = ConfigDict(populate_by_name=True, frozen=True)

	ai_probability: int = Field(alias="aiProbability")
	confidence_score: int = Field(alias="confidenceScore")
	likelihood: str
	reasoning: str = ""
	indicators: List[str] = Field(default_factory=list)

	@field_validator("indicators", mode="before")
	@classmethod
	def null_is_empty(cls, value: Any) -> Any:
		return [] if value is None else value

	@field_validator("likelihood", "reasoning", mode="before")
	@classmethod
	def null_is_blank(cls, value: Any) -> Any:
		# A blank likelihood is caught by problems() and renders gray
		return "" if value is None else value


class AnalysisResult(BaseModel):
	model_config = ConfigDict(populate_by_name=True, frozen=True)

	ai_detection: AIDetection = Field(alias="aiDetection")
	strengths: List[str] = Field(default_factory=list)
	weaknesses: List[str] = Field(default_factory=list)
	flags: List[str] = Field(default_factory=list)
	fixes: List[str] = Field(default_factory=list)

	@field_validator("strengths", "weaknesses", "flags", "fixes", mode="before")
	@classmethod
	def null_is_empty(cls, value: Any) -> Any:
		# Models sometimes emit null for an empty section
		return [] if value is None else value

	def problems(self) -> List[str]:
		"""Return the invariant violations a well-behaved provider never produces."""
		found: List[str] = []
		detection = self.ai_detection
		if not 0 <= detection.ai_probability <= 100:
			found.append(f"aiProbability out of range: {detection.ai_probability}")
		if not 0 <= detection.confidence_score <= 100:
			found.append(f"confidenceScore out of range: {detection.confidence_score}")
		if detection.likelihood not in LIKELIHOODS:
			found.append(f"likelihood not one of {', '.join(LIKELIHOODS)}: {detection.likelihood!r}")
		return found


class ErrorResponse(BaseModel):
	error: str
	details: Optional[Any] = None
	message: Optional[str] = None


class HealthResponse(BaseModel):
	status: str = "ok"
