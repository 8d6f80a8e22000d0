from .utils import SENTINELS

_SENTINEL_TABLE = {ord(char): None for char in SENTINELS}


def normalize_source(text: str, context: dict) -> str:
    """Unify line endings and drop characters reserved for placeholders."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.translate(_SENTINEL_TABLE)
