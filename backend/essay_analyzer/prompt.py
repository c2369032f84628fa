from __future__ import annotations

ESSAY_TYPES = {
	"academic": "Academic Essay",
	"university": "University Application Essay",
}

DEFAULT_ESSAY_TYPE = "academic"

_SCHEMA_BLOCK = """{
  "aiDetection": {
    "aiProbability": 45,
    "confidenceScore": 87,
    "likelihood": "low/medium/high",
    "reasoning": "brief explanation",
    "indicators": ["indicator 1", "indicator 2", "indicator 3"]
  },
  "strengths": ["strength 1", "strength 2", "strength 3"],
  "weaknesses": ["weakness 1", "weakness 2", "weakness 3"],
  "flags": ["flag 1", "flag 2"],
  "fixes": ["fix 1", "fix 2", "fix 3"]
}"""


def build_prompt(essay: str, essay_type: str) -> str:
	return (
		f"You are an expert essay analyst. Analyze this {essay_type} essay and provide feedback in the following JSON format "
		"(respond ONLY with valid JSON, no markdown, no preamble):\n\n"
		f"{_SCHEMA_BLOCK}\n\n"
		"Note:\n"
		"- aiProbability should be 0-100 (percentage likelihood the text is AI-generated)\n"
		"- confidenceScore should be 0-100 (how confident you are in the detection)\n"
		"- likelihood must be exactly one of: low, medium, high\n"
		"- Consider factors like: repetitive phrasing, unnatural transitions, generic language, overly uniform grammar, "
		"lack of personal voice, overly formal tone, predictable structure\n\n"
		f"Essay to analyze:\n{essay}"
	)
