import logging
from fastapi import APIRouter, Depends

from herbaverse import __version__
from herbaverse.dependencies import openai_client, gateway_client, supabase_client, get_knowledge_base
from herbaverse.services.knowledge_base import KnowledgeBase

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
async def root():
    return {
        "status": "online",
        "service": "HerbaVerse API",
        "version": __version__,
        "features": [
            "AI Plant Suggestions",
            "Keyword Confidence Scoring",
            "Medicinal Plant Quizzes",
            "Plant Catalog"
        ]
    }


@router.get("/health")
async def health_check(knowledge_base: KnowledgeBase = Depends(get_knowledge_base)):
    return {
        "status": "healthy",
        "version": __version__,
        "plants": len(knowledge_base),
        "services": {
            "openai": bool(openai_client),
            "ai_gateway": bool(gateway_client),
            "supabase": bool(supabase_client)
        }
    }
