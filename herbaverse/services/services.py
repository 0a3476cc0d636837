import logging
import httpx
from supabase import create_client, Client

from herbaverse.config import (
    OPENAI_API_KEY,
    OPENAI_BASE_URL,
    LOVABLE_API_KEY,
    AI_GATEWAY_URL,
    SUPABASE_URL,
    SUPABASE_KEY,
    API_TIMEOUT,
    API_CONNECT_TIMEOUT,
)

logger = logging.getLogger(__name__)


def _make_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(
            connect=API_CONNECT_TIMEOUT,
            read=API_TIMEOUT,
            write=API_TIMEOUT,
            pool=API_TIMEOUT
        )
    )


# Initialize OpenAI (plant recommendations)
openai_client = None
if OPENAI_API_KEY:
    from openai import AsyncOpenAI
    openai_client = AsyncOpenAI(
        api_key=OPENAI_API_KEY,
        base_url=OPENAI_BASE_URL,
        http_client=_make_http_client(),
        max_retries=0,
    )
    logger.info(f"OpenAI initialized with {API_TIMEOUT}s timeout")

# Initialize AI gateway (quiz generation)
gateway_client = None
if LOVABLE_API_KEY:
    from openai import AsyncOpenAI
    gateway_client = AsyncOpenAI(
        base_url=AI_GATEWAY_URL,
        api_key=LOVABLE_API_KEY,
        http_client=_make_http_client(),
        max_retries=0,
    )
    logger.info(f"AI gateway initialized ({AI_GATEWAY_URL})")

# Initialize Supabase
supabase_client: Client = None
if SUPABASE_URL and SUPABASE_KEY:
    try:
        supabase_client = create_client(SUPABASE_URL, SUPABASE_KEY)
        logger.info("Supabase initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize Supabase: {e}")
