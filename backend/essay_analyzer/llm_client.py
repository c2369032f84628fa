from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .errors import ProviderError
from .settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderConfig:
	provider: str
	api_key: Optional[str]
	model: str
	base_url: str
	max_tokens: int
	timeout: float = 60.0
	api_version: Optional[str] = None
	temperature: Optional[float] = None

	@classmethod
	def from_settings(cls, settings: Settings) -> "ProviderConfig":
		if settings.provider == "gemini":
			return cls(
				provider="gemini",
				api_key=settings.gemini_api_key,
				model=settings.gemini_model,
				base_url=settings.gemini_base_url,
				max_tokens=settings.gemini_max_output_tokens,
				temperature=settings.gemini_temperature,
				timeout=settings.http_timeout,
			)
		return cls(
			provider="anthropic",
			api_key=settings.anthropic_api_key,
			model=settings.anthropic_model,
			base_url=settings.anthropic_base_url,
			max_tokens=settings.anthropic_max_tokens,
			api_version=settings.anthropic_version,
			timeout=settings.http_timeout,
		)


def _decode_payload(r: httpx.Response) -> Any:
	try:
		return r.json()
	except ValueError:
		return r.text


class LLMProvider(ABC):
	"""Turns a prompt into completion text with exactly one HTTP request."""

	name = "provider"

	def __init__(self, config: ProviderConfig, *, http_client: Optional[httpx.AsyncClient] = None) -> None:
		self.config = config
		self._owns_client = http_client is None
		self._client = http_client or httpx.AsyncClient(timeout=config.timeout)

	@abstractmethod
	def _request(self, prompt: str) -> Dict[str, Any]:
		...

	@abstractmethod
	def _extract_text(self, data: Dict[str, Any]) -> Any:
		...

	async def complete(self, prompt: str) -> str:
		try:
			r = await self._client.post(**self._request(prompt))
		except httpx.RequestError as net_err:
			logger.error("%s request failed: %s", self.name, net_err)
			raise ProviderError(f"{self.name} request failed: {net_err}", provider=self.name) from net_err
		if not r.is_success:
			payload = _decode_payload(r)
			logger.error("%s API error (status %s): %s", self.name, r.status_code, payload)
			raise ProviderError(
				f"{self.name} returned HTTP {r.status_code}",
				provider=self.name,
				upstream_status=r.status_code,
				payload=payload,
			)
		try:
			text = self._extract_text(r.json())
		except (ValueError, KeyError, IndexError, TypeError, AttributeError) as err:
			raise ProviderError(f"Unexpected {self.name} response: {r.text[:500]}", provider=self.name) from err
		if not isinstance(text, str):
			raise ProviderError(f"Unexpected {self.name} response: {r.text[:500]}", provider=self.name)
		return text

	async def aclose(self) -> None:
		if self._owns_client:
			await self._client.aclose()


class AnthropicProvider(LLMProvider):
	name = "anthropic"

	def _request(self, prompt: str) -> Dict[str, Any]:
		return {
			"url": self.config.base_url,
			"headers": {
				"Content-Type": "application/json",
				"x-api-key": self.config.api_key or "",
				"anthropic-version": self.config.api_version or "2023-06-01",
			},
			"json": {
				"model": self.config.model,
				"max_tokens": self.config.max_tokens,
				"messages": [{"role": "user", "content": prompt}],
			},
		}

	def _extract_text(self, data: Dict[str, Any]) -> str:
		return "\n".join(block["text"] for block in data["content"] if block.get("type") == "text")


class GeminiProvider(LLMProvider):
	name = "gemini"

	def _request(self, prompt: str) -> Dict[str, Any]:
		generation_config: Dict[str, Any] = {"maxOutputTokens": self.config.max_tokens}
		if self.config.temperature is not None:
			generation_config["temperature"] = self.config.temperature
		return {
			"url": f"{self.config.base_url.rstrip('/')}/{self.config.model}:generateContent",
			"params": {"key": self.config.api_key or ""},
			"json": {
				"contents": [{"parts": [{"text": prompt}]}],
				"generationConfig": generation_config,
			},
		}

	def _extract_text(self, data: Dict[str, Any]) -> str:
		return data["candidates"][0]["content"]["parts"][0]["text"]


_PROVIDERS = {
	AnthropicProvider.name: AnthropicProvider,
	GeminiProvider.name: GeminiProvider,
}


def create_provider(config: ProviderConfig, *, http_client: Optional[httpx.AsyncClient] = None) -> LLMProvider:
	try:
		provider_cls = _PROVIDERS[config.provider]
	except KeyError:
		raise ValueError(f"Unknown provider: {config.provider}") from None
	return provider_cls(config, http_client=http_client)
