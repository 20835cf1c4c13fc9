import asyncio
import json
import logging
import re
from typing import Optional

from google import genai

from resume_builder.config import settings

logger = logging.getLogger(__name__)

_gemini_client: Optional[genai.Client] = None


class GeminiUnavailableError(RuntimeError):
    """No API key configured, or the client could not be created."""


def get_gemini_client() -> genai.Client:
    global _gemini_client
    if _gemini_client is None:
        if not settings.gemini_api_key:
            raise GeminiUnavailableError("GEMINI_API_KEY not set")
        try:
            _gemini_client = genai.Client(api_key=settings.gemini_api_key)
        except Exception as e:
            raise GeminiUnavailableError(f"Failed to initialize Gemini client: {e}") from e
        logger.info("Gemini client initialized.")
    return _gemini_client


def clean_gemini_output(text: str) -> str:
    """Removes markdown-style ```json and ``` from Gemini output."""
    text = re.sub(r"^```(?:json)?\s*", "", text.strip())
    text = re.sub(r"\s*```$", "", text.strip())
    return text.strip()


async def generate_json_from_gemini(prompt: str) -> dict:
    """Run a prompt that asks for a JSON object and return the parsed object."""
    client = get_gemini_client()
    response = await asyncio.to_thread(
        client.models.generate_content,
        model=settings.gemini_model,
        contents=prompt,
    )

    text = clean_gemini_output(response.text or "")
    logger.debug("Gemini raw response:\n%s", text)
    try:
        result = json.loads(text)
    except json.JSONDecodeError:
        # Models sometimes wrap the object in prose
        dict_match = re.search(r"\{.*\}", text, re.DOTALL)
        if not dict_match:
            raise ValueError("Gemini returned invalid JSON.")
        try:
            result = json.loads(dict_match.group(0))
        except json.JSONDecodeError as e:
            raise ValueError("Gemini returned invalid JSON.") from e

    if not isinstance(result, dict):
        raise ValueError("Expected a JSON object from Gemini.")
    return result
