import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# ============================================================================#
# ENVIRONMENT / SERVICES
# ============================================================================#
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL")  # None = api.openai.com
LOVABLE_API_KEY = os.getenv("LOVABLE_API_KEY")  # AI gateway for quiz generation
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_KEY")

# ============================================================================#
# MODELS
# ============================================================================#
RECOMMENDATION_MODEL = os.getenv("RECOMMENDATION_MODEL", "gpt-4o-mini")
RECOMMENDATION_TEMPERATURE = 0.3
RECOMMENDATION_MAX_TOKENS = 800

AI_GATEWAY_URL = os.getenv("AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1")
QUIZ_MODEL = os.getenv("QUIZ_MODEL", "google/gemini-2.5-flash")
QUIZ_DEFAULT_QUESTIONS = 5
QUIZ_MAX_QUESTIONS = 20

# Timeouts for upstream LLM calls
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "30"))  # seconds
API_CONNECT_TIMEOUT = float(os.getenv("API_CONNECT_TIMEOUT", "10"))

# ============================================================================#
# SCORING
# ============================================================================#
MAX_CONFIDENCE = 0.95
# Clamp model-reported confidence to [0, 1] before blending with keyword coverage
CLAMP_DRAFT_CONFIDENCE = os.getenv("CLAMP_DRAFT_CONFIDENCE", "0") == "1"

DISCLAIMER = (
    "This is for educational purposes only. Always consult with healthcare "
    "professionals before using medicinal plants."
)

# Supabase table for recommendation audit rows
RECOMMENDATIONS_TABLE = "plant_recommendations"

# Rate limiting per client
RATE_LIMIT = os.getenv("RATE_LIMIT", "20/minute")
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "1") == "1"
