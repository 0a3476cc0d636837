import json
from typing import Any


def normalize_query(query: str) -> str:
    """
    Lower-case and trim a user query for keyword containment checks.
    Only for matching, never change the original query sent upstream or stored.
    """
    return query.strip().lower()


def keyword_in_text(text: str, keyword: str) -> bool:
    """
    Case-insensitive substring containment (not whole-word).
    ``text`` is expected to be normalized already.
    Short keywords can match inside longer words ("heal" in "healthy").
    """
    return keyword.lower() in text


def strip_code_fences(raw_text: str) -> str:
    """
    Clean up LLM output: remove ```json / ``` fences and any text around
    the outermost JSON object.
    """
    json_str = raw_text.strip()

    # Remove ```json or ``` at the beginning
    if json_str.startswith("```json"):
        json_str = json_str[7:]
    elif json_str.startswith("```"):
        json_str = json_str[3:]

    # Remove ``` at the end
    if json_str.endswith("```"):
        json_str = json_str[:-3]

    json_str = json_str.strip()

    # Try to find JSON object if there's extra text
    if not json_str.startswith("{"):
        start_idx = json_str.find("{")
        end_idx = json_str.rfind("}")
        if start_idx != -1 and end_idx != -1:
            json_str = json_str[start_idx:end_idx + 1]

    return json_str


def parse_json_object(raw_text: str) -> Any:
    """Parse LLM output as JSON after stripping fences. Raises ``ValueError`` on bad JSON."""
    return json.loads(strip_code_fences(raw_text))


def preview(text: str, limit: int = 200) -> str:
    """Shorten text for log lines"""
    if text is None:
        return ""
    return text if len(text) <= limit else f"{text[:limit]}..."
