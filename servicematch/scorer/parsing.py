"""
AI Response Parsing - Extract and validate the scoring JSON from LLM text.

Models often wrap the object in prose or markdown fences, so the first
well-formed {...} object is located with a brace matcher that skips braces
inside JSON strings.
"""
import json
import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from servicematch.exceptions import AIParseError
from servicematch.scorer.models import SOURCE_AI, ComponentScores, MatchResult

logger = logging.getLogger(__name__)

# response key -> ComponentScores field
REQUIRED_COMPONENT_KEYS = {
    "skillMatch": "skill_match",
    "experienceScore": "experience",
    "reliabilityScore": "reliability",
    "valueScore": "value",
    "locationAdvantage": "location_advantage",
}
URGENCY_FIT_KEY = "urgencyFit"
DEFAULT_URGENCY_FIT = 50


def extract_json_object(text: Optional[str]) -> Dict[str, Any]:
    """
    Decode the first well-formed JSON object in text.

    A stray "{" in surrounding prose (unbalanced, or balanced but not JSON)
    is skipped and the search resumes at the next brace.

    Raises:
        AIParseError: No object in text decodes
    """
    if not text:
        raise AIParseError("Empty AI response")

    last_error = None
    start = text.find("{")
    while start != -1:
        end = _matching_brace(text, start)
        if end is not None:
            try:
                data = json.loads(text[start:end + 1])
            except json.JSONDecodeError as e:
                last_error = e
            else:
                if isinstance(data, dict):
                    return data
        start = text.find("{", start + 1)

    if last_error is not None:
        raise AIParseError(f"Malformed JSON object in AI response: {last_error}") from last_error
    raise AIParseError("No JSON object found in AI response")


def _matching_brace(text: str, start: int) -> Optional[int]:
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def number_field(data: Dict[str, Any], key: str) -> float:
    value = data.get(key)
    # bool is an int subclass; true/false is not a score
    if isinstance(value, bool):
        raise AIParseError(f"Non-numeric {key}: {value!r}")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise AIParseError(f"Non-numeric {key}: {value!r}")
    if not isinstance(value, (int, float)):
        raise AIParseError(f"Missing or non-numeric {key}: {value!r}")
    if not math.isfinite(value):
        raise AIParseError(f"Non-finite {key}: {value!r}")
    return float(value)


def clamped_int(x: float) -> int:
    return int(round(max(0.0, min(100.0, x))))


def string_list(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    items: List[str] = [str(v).strip() for v in value if v is not None]
    return tuple(i for i in items if i)


def parse_ai_scores(
    provider_id: str,
    text: str,
    details: Optional[Dict[str, Any]] = None
) -> MatchResult:
    """
    Build an AI-sourced MatchResult from raw LLM response text.

    overallScore must be within [0, 100]; component scores and
    successProbability are clamped. The recommendation is always derived
    from overallScore, whatever label the model returned.

    Raises:
        AIParseError: Missing/malformed JSON or unusable scores
    """
    data = extract_json_object(text)

    overall = number_field(data, "overallScore")
    if not 0.0 <= overall <= 100.0:
        raise AIParseError(f"overallScore outside [0, 100]: {overall}")

    fields = {name: clamped_int(number_field(data, key)) for key, name in REQUIRED_COMPONENT_KEYS.items()}
    if data.get(URGENCY_FIT_KEY) is None:
        fields["urgency_fit"] = DEFAULT_URGENCY_FIT
    else:
        fields["urgency_fit"] = clamped_int(number_field(data, URGENCY_FIT_KEY))

    overall_score = int(round(overall))
    if data.get("successProbability") is None:
        success = overall_score
    else:
        success = clamped_int(number_field(data, "successProbability"))

    match_reason = data.get("matchReason")
    return MatchResult(
        provider_id=provider_id,
        overall_score=overall_score,
        component_scores=ComponentScores(**fields),
        reasons=string_list(data.get("strengths")),
        concerns=string_list(data.get("concerns")),
        source=SOURCE_AI,
        match_reason=str(match_reason).strip() if match_reason else "",
        success_probability=success,
        details=dict(details or {}),
    )
