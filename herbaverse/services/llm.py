"""
Shared chat-completion call for the OpenAI-compatible upstreams.
Single attempt, bounded by a timeout, upstream failures mapped to typed errors.
"""

import asyncio
import logging
from typing import Dict, List

import httpx
from openai import APIConnectionError, APIStatusError

from herbaverse.config import API_TIMEOUT
from herbaverse.exceptions import MalformedUpstreamResponse, UpstreamUnavailable
from herbaverse.utils.text_processing import preview

logger = logging.getLogger(__name__)

# Upstream statuses surfaced to the caller unchanged
PASSTHROUGH_STATUS_MESSAGES = {
    429: "Rate limit exceeded. Please try again later.",
    402: "AI credits exhausted. Please add credits to continue.",
}


async def complete_chat(
    client,
    model: str,
    messages: List[Dict[str, str]],
    timeout: float = API_TIMEOUT,
    **params,
) -> str:
    """Run one chat completion and return the first choice's text content"""
    try:
        response = await asyncio.wait_for(
            client.chat.completions.create(
                model=model,
                messages=messages,
                **params,
            ),
            timeout=timeout
        )
    except asyncio.TimeoutError:
        logger.error(f"{model} timeout after {timeout} seconds")
        raise UpstreamUnavailable("AI service timed out. Please try again later.")
    except APIStatusError as e:
        logger.error(f"AI API error: {e.status_code} {e.message}")
        if e.status_code in PASSTHROUGH_STATUS_MESSAGES:
            raise UpstreamUnavailable(PASSTHROUGH_STATUS_MESSAGES[e.status_code], status_code=e.status_code)
        raise UpstreamUnavailable(f"AI API error: {e.status_code}")
    except (APIConnectionError, httpx.HTTPError) as e:
        logger.error(f"AI API connection error: {e}")
        raise UpstreamUnavailable("AI service unavailable. Please try again later.")

    if not response.choices:
        logger.error(f"No choices in {model} response")
        raise MalformedUpstreamResponse("Invalid response from AI service")

    content = response.choices[0].message.content
    if not content:
        logger.error(f"No content in {model} response")
        raise MalformedUpstreamResponse("No content in AI response")

    logger.info(f"{model} raw response: {preview(content, 500)}")
    return content
