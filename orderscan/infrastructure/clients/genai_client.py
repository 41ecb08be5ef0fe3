from typing import Any, List, Optional
import logging

from google import genai
from google.genai import types

from orderscan.domain.models.parts import ImagePart, RequestPart, TextPart
from orderscan.infrastructure import config

logger = logging.getLogger(__name__)


def create_client(api_key: Optional[str] = None) -> genai.Client:
    """Build a GenAI client from an explicit key, falling back to the environment."""
    api_key = api_key or config.get_api_key()
    client = genai.Client(api_key=api_key)
    logger.debug("GenAI client created successfully")
    return client


def to_genai_part(part: RequestPart) -> types.Part:
    if isinstance(part, ImagePart):
        return types.Part.from_bytes(data=part.to_bytes(), mime_type=part.mime_type)
    if isinstance(part, TextPart):
        return types.Part.from_text(text=part.text)
    raise TypeError(f"Unsupported request part: {type(part).__name__}")


async def generate_json_async(
    client: genai.Client,
    parts: List[RequestPart],
    system_instruction: str,
    response_schema: Any,
    model: Optional[str] = None,
) -> str:
    """Send one structured-output request and return the raw response text."""
    model = model or config.get_model()

    part_kinds = ", ".join(type(p).__name__ for p in parts)
    logger.info(f"Starting async extraction request - Model: {model}, parts: [{part_kinds}]")

    try:
        response = await client.aio.models.generate_content(
            model=model,
            contents=[to_genai_part(p) for p in parts],
            config=types.GenerateContentConfig(
                system_instruction=system_instruction,
                response_mime_type="application/json",
                response_schema=response_schema,
            ),
        )

        response_text = response.text or ""
        logger.info(f"Extraction request completed - Response length: {len(response_text)} chars")
        logger.debug(f"Response preview: {response_text[:200]}...")

        return response_text

    except Exception as e:
        logger.error(f"Extraction request failed: {str(e)}", exc_info=True)
        raise
