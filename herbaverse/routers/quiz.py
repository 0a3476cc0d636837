import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from herbaverse.config import RATE_LIMIT
from herbaverse.dependencies import get_quiz_generator
from herbaverse.exceptions import HerbaVerseError
from herbaverse.models import QuizRequest
from herbaverse.services.quiz import QuizGenerator
from herbaverse.utils.rate_limiter import limiter

logger = logging.getLogger(__name__)

router = APIRouter(tags=["quiz"])


@router.post("/generate-quiz")
@limiter.limit(RATE_LIMIT)
async def generate_quiz(
    request: Request,
    payload: QuizRequest,
    generator: QuizGenerator = Depends(get_quiz_generator),
):
    try:
        quiz = await generator.generate(payload.topic, payload.difficulty, payload.num_questions)
        return {"success": True, "quiz": quiz.model_dump()}
    except HerbaVerseError as e:
        logger.warning(f"Quiz generation failed ({e.status_code}): {e.message}")
        return JSONResponse(
            status_code=e.status_code,
            content={"error": e.message, "success": False}
        )
    except Exception as e:
        logger.error(f"Error in generate-quiz: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Unknown error", "success": False}
        )
