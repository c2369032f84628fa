from __future__ import annotations
from typing import Any, Dict, Optional


class AnalyzerError(Exception):
	"""Base for every failure surfaced to the user as a JSON error body."""

	status_code: int = 500
	error: str = "Failed to analyze essay"

	def __init__(self, message: Optional[str] = None) -> None:
		super().__init__(message or self.error)
		self.message = message or self.error

	def to_payload(self) -> Dict[str, Any]:
		return {"error": self.error, "message": self.message}


class ValidationError(AnalyzerError):
	status_code = 400
	error = "Essay and essay type are required"

	def to_payload(self) -> Dict[str, Any]:
		return {"error": self.message}


class ConfigurationError(AnalyzerError):
	error = "API key not configured"

	def to_payload(self) -> Dict[str, Any]:
		# Operator-facing detail stays in the logs
		return {"error": self.error}


class ProviderError(AnalyzerError):
	def __init__(
		self,
		message: str,
		*,
		provider: str,
		upstream_status: Optional[int] = None,
		payload: Any = None,
	) -> None:
		super().__init__(message)
		self.provider = provider
		self.upstream_status = upstream_status
		self.payload = payload
		self.error = f"{provider.capitalize()} API error"

	def to_payload(self) -> Dict[str, Any]:
		details = self.payload if self.payload is not None else self.message
		return {"error": self.error, "details": details}


class MalformedResponseError(AnalyzerError):
	def __init__(self, message: str, *, raw_text: str = "") -> None:
		super().__init__(message)
		self.raw_text = raw_text
