from __future__ import annotations
from typing import AsyncIterator

from fastapi import Depends

from .analysis import AnalysisClient
from .llm_client import ProviderConfig
from .settings import Settings, get_settings


async def get_analysis_client(settings: Settings = Depends(get_settings)) -> AsyncIterator[AnalysisClient]:
	client = AnalysisClient(ProviderConfig.from_settings(settings), strict=settings.strict_validation)
	try:
		yield client
	finally:
		await client.aclose()
