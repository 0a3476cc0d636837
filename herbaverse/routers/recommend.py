import logging
from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from herbaverse.config import RATE_LIMIT
from herbaverse.dependencies import get_recommender
from herbaverse.exceptions import HerbaVerseError
from herbaverse.models import RecommendRequest, RecommendationResponse
from herbaverse.services.recommendation import PlantRecommender
from herbaverse.utils.rate_limiter import limiter

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recommendations"])

RECOMMEND_PATHS = ("/recommend", "/ai-plant-suggestions")


def _echo_query(query) -> str:
    if query is None or query == "":
        return "unknown"
    return query if isinstance(query, str) else str(query)


def _error_response(status_code: int, message: str, query) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "query": _echo_query(query)}
    )


async def invalid_request_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies on the recommendation routes get the same error shape as InvalidInput"""
    if request.url.path not in RECOMMEND_PATHS:
        return await request_validation_exception_handler(request, exc)
    logger.warning(f"Invalid recommendation request: {exc.errors()[:1]}")
    return _error_response(400, "Invalid request body", None)


@router.post("/recommend", response_model=RecommendationResponse)
@router.post("/ai-plant-suggestions", response_model=RecommendationResponse, include_in_schema=False)
@limiter.limit(RATE_LIMIT)
async def recommend_plants(
    request: Request,
    payload: RecommendRequest,
    background_tasks: BackgroundTasks,
    recommender: PlantRecommender = Depends(get_recommender),
):
    try:
        return await recommender.recommend(payload.query, payload.user_id, background_tasks)
    except HerbaVerseError as e:
        logger.warning(f"Plant suggestion failed ({e.status_code}): {e.message}")
        return _error_response(e.status_code, e.message, payload.query)
    except Exception as e:
        logger.error(f"Error in AI suggestions: {e}", exc_info=True)
        return _error_response(500, "Failed to process plant suggestions", payload.query)
