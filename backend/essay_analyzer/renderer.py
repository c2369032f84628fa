from __future__ import annotations
from dataclasses import dataclass, field
from html import escape
from typing import List, Optional

from .schemas import AnalysisResult

GREEN = "green"
YELLOW = "yellow"
RED = "red"
GRAY = "gray"

_LIKELIHOOD_COLORS = {"low": GREEN, "medium": YELLOW, "high": RED}


def likelihood_color(likelihood: object) -> str:
	return _LIKELIHOOD_COLORS.get(likelihood, GRAY) if isinstance(likelihood, str) else GRAY


def percentage_color(value: float) -> str:
	if value < 30:
		return GREEN
	if value < 60:
		return YELLOW
	return RED


def word_count(essay: str) -> int:
	return len(essay.split())


def _bar_width(value: int) -> int:
	return max(0, min(100, value))


@dataclass(frozen=True)
class DetectionSummary:
	ai_probability: int
	probability_color: str
	confidence_score: int
	likelihood: str
	likelihood_color: str
	reasoning: str
	indicators: List[str] = field(default_factory=list)

	@property
	def probability_width(self) -> int:
		return _bar_width(self.ai_probability)

	@property
	def confidence_width(self) -> int:
		return _bar_width(self.confidence_score)


@dataclass(frozen=True)
class Section:
	key: str
	title: str
	accent: str
	items: List[str] = field(default_factory=list)
	numbered: bool = False


@dataclass(frozen=True)
class Dashboard:
	detection: DetectionSummary
	sections: List[Section]
	word_count: Optional[int] = None

	def section(self, key: str) -> Section:
		for section in self.sections:
			if section.key == key:
				return section
		raise KeyError(key)


def render(result: AnalysisResult, essay: Optional[str] = None) -> Dashboard:
	"""Map an analysis onto the dashboard sections, preserving provider order."""
	detection = result.ai_detection
	summary = DetectionSummary(
		ai_probability=detection.ai_probability,
		probability_color=percentage_color(detection.ai_probability),
		confidence_score=detection.confidence_score,
		likelihood=detection.likelihood.upper(),
		likelihood_color=likelihood_color(detection.likelihood),
		reasoning=detection.reasoning,
		indicators=list(detection.indicators),
	)
	sections = [
		Section("strengths", "Strengths", GREEN, list(result.strengths)),
		Section("weaknesses", "Weaknesses", "orange", list(result.weaknesses)),
		Section("flags", "Red Flags", RED, list(result.flags)),
		Section("fixes", "How to Fix & Improve", "blue", list(result.fixes), numbered=True),
	]
	return Dashboard(
		detection=summary,
		sections=sections,
		word_count=word_count(essay) if essay is not None else None,
	)


def _render_items(items: List[str], numbered: bool) -> str:
	tag = "ol" if numbered else "ul"
	rows = "".join(f"<li>{escape(item)}</li>" for item in items)
	return f'<{tag} class="items">{rows}</{tag}>'


def render_html(dashboard: Dashboard) -> str:
	d = dashboard.detection
	parts = [
		'<section class="card" id="detection">',
		"<h2>AI Detection Analysis</h2>",
		'<div class="scores">',
		'<div class="score"><p class="label">AI Probability</p>',
		f'<p class="value">{d.ai_probability}%</p>',
		f'<div class="bar"><div class="fill bg-{d.probability_color}" style="width: {d.probability_width}%"></div></div></div>',
		'<div class="score"><p class="label">Confidence Score</p>',
		f'<p class="value confidence">{d.confidence_score}%</p>',
		f'<div class="bar"><div class="fill bg-blue" style="width: {d.confidence_width}%"></div></div></div>',
		"</div>",
		f'<div class="badge badge-{d.likelihood_color}">',
		f'<p class="assessment">Assessment: {escape(d.likelihood)}</p>',
		f"<p>{escape(d.reasoning)}</p></div>",
		'<div class="indicators"><p class="label">AI Indicators Detected:</p>',
		_render_items(d.indicators, numbered=False),
		"</div></section>",
	]
	for section in dashboard.sections:
		parts.append(f'<section class="card accent-{section.accent}" id="{section.key}">')
		parts.append(f"<h2>{escape(section.title)}</h2>")
		parts.append(_render_items(section.items, numbered=section.numbered))
		parts.append("</section>")
	return "\n".join(parts)
