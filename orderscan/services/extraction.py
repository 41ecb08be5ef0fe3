import asyncio
import json
import logging
from typing import Any, List, Optional

from orderscan.domain.models.order import OrderItem, carry_down_vendor_names
from orderscan.domain.models.parts import RequestPart, TextPart, parse_image_input
from orderscan.domain.prompts.order_list import (
    RAW_TEXT_PREFIX,
    order_list_image_instructions,
    order_list_response_schema,
    order_list_system_instruction,
)
from orderscan.infrastructure import config
from orderscan.infrastructure.clients.genai_client import create_client, generate_json_async
from orderscan.shared import utils

logger = logging.getLogger(__name__)

ORDER_EXTRACTION_FAILED_MESSAGE = "발주 내역을 분석하지 못했습니다. 이미지가 선명한지 확인해주세요."


class OrderExtractionError(RuntimeError):
    """Raised for every extraction failure; the cause is only logged."""

    def __init__(self, message: str = ORDER_EXTRACTION_FAILED_MESSAGE):
        super().__init__(message)


def build_request_parts(source: str, is_image: bool = False) -> List[RequestPart]:
    if is_image:
        return [parse_image_input(source), TextPart(text=order_list_image_instructions)]
    return [TextPart(text=f"{RAW_TEXT_PREFIX}{source}")]


def decode_orders(text_response: str, carry_down_vendors: bool = True) -> List[OrderItem]:
    """Parse the model's JSON text into validated order records."""
    try:
        data: Any = json.loads(text_response)
    except json.JSONDecodeError as e:
        logger.warning(f"JSON decode failed: {e}, attempting fallback parsing")
        data = utils.load_json_from_text(text_response)

    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of orders, got {type(data).__name__}")

    if carry_down_vendors:
        data = carry_down_vendor_names(data)

    return [OrderItem.model_validate(row) for row in data]


class OrderExtractionAdapter:
    """Turns order text or a spreadsheet screenshot into order records via Gemini."""

    def __init__(self, client, model: Optional[str] = None, carry_down_vendors: Optional[bool] = None):
        self.client = client
        self.model = model or config.get_model()
        self.carry_down_vendors = (
            config.get_carry_down_vendors() if carry_down_vendors is None else carry_down_vendors
        )

    @classmethod
    def from_api_key(cls, api_key: Optional[str] = None, model: Optional[str] = None) -> "OrderExtractionAdapter":
        return cls(create_client(api_key), model=model)

    async def extract_orders(self, source: str, is_image: bool = False) -> List[OrderItem]:
        mode = "image" if is_image else "text"
        logger.info(f"Extracting orders from {mode} input, {len(source)} chars")

        try:
            parts = build_request_parts(source, is_image)
            text_response = await generate_json_async(
                self.client,
                parts,
                system_instruction=order_list_system_instruction,
                response_schema=order_list_response_schema,
                model=self.model,
            )
            if not text_response:
                logger.info("Empty response from model, no orders extracted")
                return []

            orders = decode_orders(text_response, self.carry_down_vendors)
        except Exception as e:
            logger.error(f"Error parsing orders: {e}", exc_info=True)
            raise OrderExtractionError() from None

        logger.info(f"Extracted {len(orders)} orders from {mode} input")
        return orders

    def extract_orders_sync(self, source: str, is_image: bool = False) -> List[OrderItem]:
        """Synchronous wrapper around ``extract_orders``."""
        return asyncio.run(self.extract_orders(source, is_image))
