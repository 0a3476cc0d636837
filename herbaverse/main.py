# HerbaVerse API
import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.cors import CORSMiddleware

from herbaverse import __version__
from herbaverse.config import OPENAI_API_KEY, LOVABLE_API_KEY, RATE_LIMIT, RATE_LIMIT_ENABLED
from herbaverse.dependencies import supabase_client, get_knowledge_base
from herbaverse.routers import health, plants, quiz, recommend
from herbaverse.utils.rate_limiter import limiter

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ============================================================================#
# Lifespan Events
# ============================================================================#
@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    # Startup
    logger.info("=" * 60)
    logger.info("Starting HerbaVerse API")
    logger.info(f"OpenAI API: {'✓' if OPENAI_API_KEY else '✗'}")
    logger.info(f"AI Gateway: {'✓' if LOVABLE_API_KEY else '✗'}")
    logger.info(f"Supabase: {'✓' if supabase_client else '✗'}")
    logger.info(f"Knowledge base: {len(get_knowledge_base())} plants")
    logger.info(f"Rate limit: {RATE_LIMIT if RATE_LIMIT_ENABLED else 'disabled'}")
    logger.info("=" * 60)

    yield

    # Shutdown
    logger.info("Shutting down gracefully...")


# Initialize FastAPI app
app = FastAPI(
    title="HerbaVerse API",
    description="AI-assisted medicinal plant suggestions, quizzes and plant catalog",
    version=__version__,
    lifespan=lifespan
)

# Initialize Rate Limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# {error, query} body for malformed recommendation requests
app.add_exception_handler(RequestValidationError, recommend.invalid_request_handler)

# Add CORS Middleware for the web client
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(plants.router)
app.include_router(recommend.router)
app.include_router(quiz.router)


if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run("herbaverse.main:app", host="0.0.0.0", port=port)
