from __future__ import annotations
import logging
from html import escape
from typing import Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse

from ..analysis import AnalysisClient
from ..deps import get_analysis_client
from ..errors import AnalyzerError
from ..prompt import DEFAULT_ESSAY_TYPE, ESSAY_TYPES
from ..renderer import render, render_html, word_count
from ..schemas import AnalysisRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["web"])

EMPTY_ESSAY_MESSAGE = "Please enter an essay to analyze"
FAILED_MESSAGE = "Failed to analyze essay. Please try again."

_STYLE = """
body { font-family: system-ui, sans-serif; background: #eef2ff; margin: 0; padding: 24px; color: #1f2937; }
.wrap { max-width: 56rem; margin: 0 auto; }
.card { background: #fff; border-radius: 16px; box-shadow: 0 10px 25px rgba(0,0,0,.08); padding: 32px; margin-bottom: 24px; }
label { display: block; font-size: .875rem; font-weight: 500; margin-bottom: 8px; }
select, textarea { width: 100%; box-sizing: border-box; padding: 8px 16px; border: 1px solid #d1d5db; border-radius: 8px; margin-bottom: 16px; }
textarea { height: 16rem; resize: none; }
.muted { color: #6b7280; font-size: .875rem; }
button { width: 100%; background: #2563eb; color: #fff; border: 0; padding: 12px; border-radius: 8px; font-weight: 600; cursor: pointer; }
button:disabled { background: #9ca3af; cursor: not-allowed; }
.error { background: #fef2f2; border: 1px solid #fecaca; color: #b91c1c; padding: 16px; border-radius: 8px; margin-bottom: 16px; }
.scores { display: grid; grid-template-columns: 1fr 1fr; gap: 24px; margin-bottom: 24px; }
.score { text-align: center; padding: 24px; background: #f9fafb; border: 2px solid #e5e7eb; border-radius: 12px; }
.value { font-size: 3rem; font-weight: 700; margin: 8px 0; }
.confidence { color: #2563eb; }
.bar { background: #e5e7eb; border-radius: 9999px; height: 12px; overflow: hidden; }
.fill { height: 100%; }
.bg-green { background: #22c55e; } .bg-yellow { background: #eab308; } .bg-red { background: #ef4444; } .bg-blue { background: #3b82f6; }
.badge { padding: 20px; border-radius: 12px; border: 2px solid; margin-bottom: 16px; }
.badge-green { color: #16a34a; background: #f0fdf4; border-color: #bbf7d0; }
.badge-yellow { color: #ca8a04; background: #fefce8; border-color: #fef08a; }
.badge-red { color: #dc2626; background: #fef2f2; border-color: #fecaca; }
.badge-gray { color: #4b5563; background: #f9fafb; border-color: #e5e7eb; }
.assessment { font-weight: 700; font-size: 1.125rem; }
.indicators { background: #f9fafb; padding: 20px; border-radius: 12px; border: 1px solid #e5e7eb; }
.items li { margin-bottom: 12px; }
"""

_SCRIPT = """
const essay = document.getElementById('essay');
const counter = document.getElementById('word-count');
const countWords = () => { counter.textContent = essay.value.split(/\\s+/).filter(w => w).length + ' words'; };
essay.addEventListener('input', countWords);
document.getElementById('analyze-form').addEventListener('submit', () => {
  const button = document.getElementById('analyze-button');
  button.disabled = true;
  button.textContent = 'Analyzing...';
});
"""


def _type_options(selected: str) -> str:
	options = []
	for value, label in ESSAY_TYPES.items():
		attr = " selected" if value == selected else ""
		options.append(f'<option value="{escape(value)}"{attr}>{escape(label)}</option>')
	return "".join(options)


def _get_page_html(
	essay: str = "",
	essay_type: str = DEFAULT_ESSAY_TYPE,
	error: Optional[str] = None,
	dashboard_html: str = "",
) -> str:
	error_html = f'<div class="error">{escape(error)}</div>' if error else ""
	return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Essay Analyzer</title>
<style>{_STYLE}</style>
</head>
<body>
<div class="wrap">
<div class="card">
<h1>Essay Analyzer</h1>
<p class="muted">Get AI-powered feedback on your essay</p>
<form id="analyze-form" method="post" action="/">
<label for="essay_type">Essay Type</label>
<select id="essay_type" name="essay_type">{_type_options(essay_type)}</select>
<label for="essay">Paste Your Essay</label>
<textarea id="essay" name="essay" placeholder="Paste your essay here...">{escape(essay)}</textarea>
<p class="muted" id="word-count">{word_count(essay)} words</p>
{error_html}
<button id="analyze-button" type="submit">Analyze Essay</button>
</form>
</div>
{dashboard_html}
</div>
<script>{_SCRIPT}</script>
</body>
</html>"""


@router.get("/", response_class=HTMLResponse)
async def essay_page():
	return HTMLResponse(content=_get_page_html())


@router.post("/", response_class=HTMLResponse)
async def submit_essay(
	essay: str = Form(default=""),
	essay_type: str = Form(default=DEFAULT_ESSAY_TYPE),
	client: AnalysisClient = Depends(get_analysis_client),
):
	if not essay.strip():
		return HTMLResponse(content=_get_page_html(essay, essay_type, error=EMPTY_ESSAY_MESSAGE))
	try:
		result = await client.analyze(AnalysisRequest(essay=essay, essay_type=essay_type or DEFAULT_ESSAY_TYPE))
	except AnalyzerError as exc:
		logger.error("Essay analysis failed: %s", exc)
		return HTMLResponse(content=_get_page_html(essay, essay_type, error=FAILED_MESSAGE))
	dashboard = render(result, essay)
	return HTMLResponse(content=_get_page_html(essay, essay_type, dashboard_html=render_html(dashboard)))
