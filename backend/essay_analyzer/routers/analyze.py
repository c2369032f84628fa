from __future__ import annotations
from fastapi import APIRouter, Depends, Request, Response

from ..analysis import AnalysisClient, validate_request
from ..deps import get_analysis_client
from ..request_body import read_json_body
from ..schemas import AnalysisResult, ErrorResponse

router = APIRouter(prefix="/api", tags=["analyze"])


@router.post(
	"/analyze",
	response_model=AnalysisResult,
	responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze_essay(request: Request, client: AnalysisClient = Depends(get_analysis_client)):
	payload = await read_json_body(request)
	analysis_request = validate_request(payload)
	return await client.analyze(analysis_request)


@router.options("/analyze", include_in_schema=False)
async def analyze_preflight():
	return Response(status_code=200)
