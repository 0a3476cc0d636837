"""
Plant Recommendation Pipeline
query → AI analysis → keyword reconciliation → ranking → response
with a best-effort audit write dispatched after the response is built.
"""

import asyncio
import logging
import time
from typing import Any, Optional, Set

from herbaverse.config import CLAMP_DRAFT_CONFIDENCE, DISCLAIMER
from herbaverse.exceptions import InvalidInput
from herbaverse.models import QueryRecord, RecommendationResponse
from herbaverse.services.knowledge_base import KnowledgeBase, default_knowledge_base
from herbaverse.services.persistence import RecommendationStore
from herbaverse.services.reasoning import PlantReasoner
from herbaverse.services.reconciliation import rank_recommendations, reconcile_recommendations
from herbaverse.utils.text_processing import normalize_query

logger = logging.getLogger(__name__)


class PlantRecommender:
    def __init__(
        self,
        reasoner: PlantReasoner,
        knowledge_base: KnowledgeBase = default_knowledge_base,
        store: Optional[RecommendationStore] = None,
        clamp_draft_confidence: bool = CLAMP_DRAFT_CONFIDENCE,
    ):
        self.reasoner = reasoner
        self.knowledge_base = knowledge_base
        self.store = store
        self.clamp_draft_confidence = clamp_draft_confidence
        self._pending: Set[asyncio.Task] = set()

    async def recommend(
        self,
        query: Any,
        user_id: Optional[str] = None,
        background_tasks=None,
    ) -> RecommendationResponse:
        """
        Recommend plants for a free-text health query.

        Args:
            query: user's question, sent upstream and stored verbatim
            user_id: when set, an audit row is written after the response is built
            background_tasks: FastAPI ``BackgroundTasks``; without it the audit
                write runs as a detached asyncio task

        Raises:
            InvalidInput: missing, empty or non-string query (no upstream call is made)
            UpstreamUnavailable, MalformedUpstreamResponse, ServiceNotConfigured
        """
        if query is not None and not isinstance(query, str):
            raise InvalidInput("Query must be a string")
        if not query or not query.strip():
            raise InvalidInput("Query is required")

        start_time = time.time()
        logger.info(f"Processing AI query: {query[:100]}")

        normalized = normalize_query(query)
        analysis, raw_response = await self.reasoner.analyze(query)

        reconciled = reconcile_recommendations(
            analysis.recommendations,
            self.knowledge_base,
            normalized,
            clamp_draft=self.clamp_draft_confidence,
        )
        ranked = rank_recommendations(reconciled)

        response = RecommendationResponse(
            query=query,
            conditions=analysis.conditions,
            recommendations=ranked,
            disclaimer=DISCLAIMER,
        )

        if user_id:
            record = QueryRecord(
                user_id=user_id,
                query_text=query,
                recommended_plants=ranked,
                ai_response=raw_response,
            )
            self._dispatch_audit(record, background_tasks)

        elapsed_ms = (time.time() - start_time) * 1000
        logger.info(f"✓ {len(ranked)} recommendations ready in {elapsed_ms:.0f}ms")
        return response

    def _dispatch_audit(self, record: QueryRecord, background_tasks=None):
        if not self.store:
            logger.warning("Recommendation store not configured, skipping audit write")
            return

        if background_tasks is not None:
            background_tasks.add_task(self.store.save, record)
            return

        # store.save never raises, so the detached task cannot fail the request
        task = asyncio.create_task(asyncio.to_thread(self.store.save, record))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
