import logging
from typing import Tuple

from pydantic import ValidationError

from herbaverse.config import (
    API_TIMEOUT,
    RECOMMENDATION_MODEL,
    RECOMMENDATION_TEMPERATURE,
    RECOMMENDATION_MAX_TOKENS,
)
from herbaverse.exceptions import MalformedUpstreamResponse, ServiceNotConfigured
from herbaverse.models import ReasoningResult
from herbaverse.services.knowledge_base import KnowledgeBase, generate_plant_prompt_section
from herbaverse.services.llm import complete_chat
from herbaverse.utils.text_processing import parse_json_object

logger = logging.getLogger(__name__)


def build_system_prompt(knowledge_base: KnowledgeBase) -> str:
    return f"""You are an herbal medicine expert. Analyze user health queries and recommend medicinal plants.

Available plants in database:
{generate_plant_prompt_section(knowledge_base)}

Respond with a JSON object containing:
1. "conditions": array of identified health conditions
2. "recommendations": array of plant recommendations with:
   - "plantId": matching plant ID from database
   - "plantName": plant name
   - "confidence": 0.0-1.0 confidence score
   - "reasoning": why this plant is recommended
   - "usage": how to use the plant
   - "precautions": any warnings

IMPORTANT: Only recommend plants from the available database. Be conservative with confidence scores."""


class PlantReasoner:
    """Asks the language model which conditions a query describes and which plants fit"""

    def __init__(
        self,
        client,
        knowledge_base: KnowledgeBase,
        model: str = RECOMMENDATION_MODEL,
        temperature: float = RECOMMENDATION_TEMPERATURE,
        max_tokens: int = RECOMMENDATION_MAX_TOKENS,
        timeout: float = API_TIMEOUT,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.system_prompt = build_system_prompt(knowledge_base)

    async def analyze(self, query: str) -> Tuple[ReasoningResult, str]:
        """
        Send the query (original casing) to the model.

        Returns the validated result and the raw response text.
        Raises ``UpstreamUnavailable`` or ``MalformedUpstreamResponse``.
        """
        if not self.client:
            logger.error("OpenAI API key not configured")
            raise ServiceNotConfigured("Plant suggestion service not configured")

        raw_text = await complete_chat(
            self.client,
            self.model,
            [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": query},
            ],
            timeout=self.timeout,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        try:
            data = parse_json_object(raw_text)
        except ValueError as e:
            logger.error(f"Failed to parse AI response: {e}; raw={raw_text!r}")
            raise MalformedUpstreamResponse("Failed to parse AI analysis")

        try:
            result = ReasoningResult.model_validate(data)
        except ValidationError as e:
            logger.error(f"AI response does not match expected shape: {e}; raw={raw_text!r}")
            raise MalformedUpstreamResponse("Failed to parse AI analysis")

        logger.info(
            f"✓ AI identified {len(result.conditions)} conditions, "
            f"{len(result.recommendations)} draft recommendations"
        )
        return result, raw_text
