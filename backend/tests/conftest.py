import json
from typing import Callable, List

import httpx
import pytest

from essay_analyzer.llm_client import ProviderConfig

SAMPLE_ESSAY = "The sun set over the hill."

SAMPLE_RESULT = {
	"aiDetection": {
		"aiProbability": 10,
		"confidenceScore": 90,
		"likelihood": "low",
		"reasoning": "natural voice",
		"indicators": ["varied sentence length"],
	},
	"strengths": ["vivid imagery"],
	"weaknesses": ["too short"],
	"flags": [],
	"fixes": ["expand detail"],
}


def anthropic_config(api_key="test-key") -> ProviderConfig:
	return ProviderConfig(
		provider="anthropic",
		api_key=api_key,
		model="claude-sonnet-4-20250514",
		base_url="https://api.anthropic.com/v1/messages",
		max_tokens=4000,
		api_version="2023-06-01",
	)


def gemini_config(api_key="test-key") -> ProviderConfig:
	return ProviderConfig(
		provider="gemini",
		api_key=api_key,
		model="gemini-2.5-flash",
		base_url="https://generativelanguage.googleapis.com/v1beta/models",
		max_tokens=2048,
		temperature=0.4,
	)


def anthropic_envelope(text: str) -> dict:
	return {"content": [{"type": "text", "text": text}], "role": "assistant"}


def gemini_envelope(text: str) -> dict:
	return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


class Recorder:
	def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
		self.requests: List[httpx.Request] = []
		self._responder = responder

	def __call__(self, request: httpx.Request) -> httpx.Response:
		self.requests.append(request)
		return self._responder(request)

	@property
	def calls(self) -> int:
		return len(self.requests)

	def client(self) -> httpx.AsyncClient:
		return httpx.AsyncClient(transport=httpx.MockTransport(self))

	def last_json(self) -> dict:
		return json.loads(self.requests[-1].content)


@pytest.fixture
def sample_result() -> dict:
	return json.loads(json.dumps(SAMPLE_RESULT))


@pytest.fixture
def anthropic_ok(sample_result) -> Recorder:
	return Recorder(lambda request: httpx.Response(200, json=anthropic_envelope(json.dumps(sample_result))))
