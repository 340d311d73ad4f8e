import re

from unidecode import unidecode
from pydantic import ConfigDict, validate_call


@validate_call(config=ConfigDict(strict=True))
def to_ascii(text: str) -> str:
    """Transliterate text to plain ASCII (e.g. "naïve" -> "naive").

    Args:
        text (str): The input text.

    Returns:
        str: The ASCII rendition of the text.

    """
    return unidecode(text)


def format_line(text: str, ascii_only: bool = False) -> str:
    """
    Cleans a raw corpus line before it is split into words.

    1. Strips surrounding whitespace.
    2. Optionally transliterates to ASCII.
    3. Collapses runs of whitespace into a single space.

    Case and punctuation are left alone, they are part of what the model learns.
    """
    text = text.strip()
    if ascii_only:
        text = to_ascii(text)
    return re.sub(r"\s+", " ", text)
