from __future__ import annotations
import json
import logging
import re
from typing import Any, Optional

import httpx
from pydantic import ValidationError as SchemaError

from .errors import ConfigurationError, MalformedResponseError, ValidationError
from .llm_client import LLMProvider, ProviderConfig, create_provider
from .prompt import build_prompt
from .renderer import word_count
from .schemas import AnalysisRequest, AnalysisResult

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```json|```")
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def validate_request(payload: Any) -> AnalysisRequest:
	if not isinstance(payload, dict):
		raise ValidationError()
	essay = payload.get("essay")
	essay_type = payload.get("essayType")
	if not isinstance(essay, str) or not isinstance(essay_type, str):
		raise ValidationError()
	if not essay.strip() or not essay_type.strip():
		raise ValidationError()
	return AnalysisRequest(essay=essay, essay_type=essay_type.strip())


def strip_code_fences(text: str) -> str:
	return _FENCE_RE.sub("", text).strip()


def _load_json_object(text: str, raw_text: str) -> Any:
	try:
		return json.loads(text)
	except ValueError:
		pass
	# Fall back to the first JSON object in the text, e.g. after a stray preamble
	match = _OBJECT_RE.search(text)
	if match:
		try:
			return json.loads(match.group(0))
		except ValueError:
			pass
	raise MalformedResponseError("Provider response is not valid JSON", raw_text=raw_text)


def parse_analysis(text: str) -> AnalysisResult:
	cleaned = strip_code_fences(text)
	data = _load_json_object(cleaned, text)
	if not isinstance(data, dict):
		raise MalformedResponseError("Provider response is not a JSON object", raw_text=text)
	try:
		return AnalysisResult.model_validate(data)
	except SchemaError as exc:
		raise MalformedResponseError(
			f"Provider response does not match the analysis schema: {exc.error_count()} error(s)",
			raw_text=text,
		) from exc


class AnalysisClient:
	def __init__(
		self,
		config: ProviderConfig,
		*,
		provider: Optional[LLMProvider] = None,
		http_client: Optional[httpx.AsyncClient] = None,
		strict: bool = True,
	) -> None:
		self.config = config
		self.strict = strict
		self._provider = provider
		self._http_client = http_client

	@property
	def provider(self) -> LLMProvider:
		# Built lazily so a missing credential never opens a connection pool
		if self._provider is None:
			self._provider = create_provider(self.config, http_client=self._http_client)
		return self._provider

	async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
		if not request.essay.strip() or not request.essay_type.strip():
			raise ValidationError()
		if not self.config.api_key:
			logger.error("%s API key not configured", self.config.provider)
			raise ConfigurationError()

		prompt = build_prompt(request.essay, request.essay_type)
		text = await self.provider.complete(prompt)
		try:
			result = parse_analysis(text)
		except MalformedResponseError:
			logger.warning("Malformed %s response: %r", self.config.provider, text[:300])
			raise

		problems = result.problems()
		if problems:
			if self.strict:
				logger.warning("Rejected %s response: %s", self.config.provider, "; ".join(problems))
				raise MalformedResponseError("; ".join(problems), raw_text=text)
			logger.warning("Accepted %s response with problems: %s", self.config.provider, "; ".join(problems))

		logger.info(
			"Analyzed %s essay (%d words) via %s",
			request.essay_type,
			word_count(request.essay),
			self.config.provider,
		)
		return result

	async def aclose(self) -> None:
		if self._provider is not None:
			await self._provider.aclose()
