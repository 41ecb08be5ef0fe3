import os
from dotenv import load_dotenv

load_dotenv()


def get_api_key() -> str:
    key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    if not key:
        raise RuntimeError("Missing GEMINI_API_KEY/GOOGLE_API_KEY")
    return key


def get_model() -> str:
    return os.getenv("GENAI_MODEL", "gemini-2.0-flash")


def get_carry_down_vendors() -> bool:
    """Return whether blank vendor names are filled from the row above, defaulting to on."""
    value = os.getenv("ORDERSCAN_CARRY_DOWN_VENDORS", "1").strip().lower()
    return value not in {"0", "false", "no", "off"}
