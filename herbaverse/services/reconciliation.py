"""
Confidence Reconciliation
Blends the model's self-reported confidence with literal keyword evidence
from the user's own words, then ranks the result.
"""

import logging
import math
from typing import Any, Dict, List

from pydantic import ValidationError

from herbaverse.config import MAX_CONFIDENCE
from herbaverse.models import RecommendationDraft
from herbaverse.services.knowledge_base import KnowledgeBase, PlantRecord
from herbaverse.utils.text_processing import keyword_in_text

logger = logging.getLogger(__name__)


def round_half_up(value: float, digits: int = 2) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def match_keywords(plant: PlantRecord, normalized_query: str) -> List[str]:
    """Keywords found in the query, in knowledge-base order"""
    return [kw for kw in plant.confidence_keywords if keyword_in_text(normalized_query, kw)]


def keyword_coverage(matched: List[str], plant: PlantRecord) -> float:
    total = len(plant.confidence_keywords)
    if total == 0:
        return 0.0
    return len(matched) / total


def blend_confidence(draft_confidence: float, coverage: float, clamp_draft: bool = False) -> float:
    """``min(0.95, (draft + coverage) / 2)`` rounded to two decimals"""
    if clamp_draft:
        draft_confidence = min(1.0, max(0.0, draft_confidence))
    final = min(MAX_CONFIDENCE, (draft_confidence + coverage) / 2)
    return round_half_up(final)


def reconcile_draft(
    raw: Any,
    knowledge_base: KnowledgeBase,
    normalized_query: str,
    clamp_draft: bool = False,
) -> Any:
    """
    Recompute confidence for one draft entry.

    Entries that fail validation or name no known plant come back unchanged.
    """
    try:
        draft = RecommendationDraft.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"Passing through malformed recommendation entry: {e.errors()[:1]}")
        return raw

    plant = knowledge_base.resolve(draft.plant_id, draft.plant_name)
    if not plant:
        logger.info(f"No plant in knowledge base for {draft.plant_id or draft.plant_name!r}, passing through")
        return raw

    matched = match_keywords(plant, normalized_query)
    coverage = keyword_coverage(matched, plant)

    return {
        **raw,
        "confidence": blend_confidence(draft.confidence, coverage, clamp_draft),
        "matchedSymptoms": matched,
    }


def has_non_finite(value: Any) -> bool:
    """True if any float in a JSON value is NaN or infinite (not serializable back to JSON)"""
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(has_non_finite(v) for v in value.values())
    if isinstance(value, list):
        return any(has_non_finite(v) for v in value)
    return False


def reconcile_recommendations(
    drafts: List[Any],
    knowledge_base: KnowledgeBase,
    normalized_query: str,
    clamp_draft: bool = False,
) -> List[Dict[str, Any]]:
    reconciled = []
    for raw in drafts:
        if not isinstance(raw, dict):
            logger.warning(f"Dropping non-object recommendation entry: {raw!r}")
            continue
        if has_non_finite(raw):
            logger.warning(f"Dropping recommendation entry with NaN/Infinity: {raw!r}")
            continue
        reconciled.append(reconcile_draft(raw, knowledge_base, normalized_query, clamp_draft))
    return reconciled


def _sort_key(rec: Dict[str, Any]) -> float:
    confidence = rec.get("confidence")
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        return float("-inf")
    if not math.isfinite(confidence):
        return float("-inf")
    return float(confidence)


def rank_recommendations(recommendations: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Highest confidence first; equal scores keep their order (stable sort)"""
    return sorted(recommendations, key=_sort_key, reverse=True)
