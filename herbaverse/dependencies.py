"""
Shared clients and FastAPI dependency providers.
Tests swap the pipeline objects through ``app.dependency_overrides``.
"""

from functools import lru_cache

from herbaverse.services.services import openai_client, gateway_client, supabase_client
from herbaverse.services.knowledge_base import KnowledgeBase, default_knowledge_base
from herbaverse.services.persistence import RecommendationStore
from herbaverse.services.quiz import QuizGenerator
from herbaverse.services.reasoning import PlantReasoner
from herbaverse.services.recommendation import PlantRecommender

__all__ = [
    "openai_client",
    "gateway_client",
    "supabase_client",
    "get_knowledge_base",
    "get_recommender",
    "get_quiz_generator",
]


def get_knowledge_base() -> KnowledgeBase:
    return default_knowledge_base


@lru_cache(maxsize=1)
def get_recommender() -> PlantRecommender:
    return PlantRecommender(
        reasoner=PlantReasoner(openai_client, default_knowledge_base),
        knowledge_base=default_knowledge_base,
        store=RecommendationStore(supabase_client) if supabase_client else None,
    )


@lru_cache(maxsize=1)
def get_quiz_generator() -> QuizGenerator:
    return QuizGenerator(gateway_client)
