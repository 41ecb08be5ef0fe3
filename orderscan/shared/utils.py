import json
from typing import Any


def load_json_from_text(response: str) -> Any:
    """Extract JSON from a text response that contains a JSON code block."""
    return json.loads(response.strip().removeprefix("```json").removesuffix("```"))
