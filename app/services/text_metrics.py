import math
from typing import Sequence

from app.schemas.blog import ContentBlock

WORDS_PER_MINUTE = 200


def _count_tokens(text: str) -> int:
    # Single-space split on purpose: "" and double spaces still yield tokens
    return len(text.split(" "))


def count_words(content: Sequence[ContentBlock]) -> int:
    total = 0
    for block in content:
        total += _count_tokens(block.heading)
        for span in block.body:
            text = span.get("text")
            if isinstance(text, str):
                total += _count_tokens(text)
    return total


def calculate_reading_time(
    content: Sequence[ContentBlock], words_per_minute: int = WORDS_PER_MINUTE
) -> int:
    """Minutes needed to read ``content``. An empty post takes 0 minutes."""
    return math.ceil(count_words(content) / words_per_minute)


def format_reading_time(minutes: int) -> str:
    return f"{minutes} min"
