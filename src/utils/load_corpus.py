import logging
import os
import pathlib
from typing import Optional, Union

from char_models.corpus_model import CorpusModel
from utils.constants import CORPORA_PATH
from utils.formatting import format_line

logger = logging.getLogger(__name__)


def load_corpus(model: CorpusModel, filepath: Union[str, pathlib.Path],
                delimiters: Optional[str] = None, ascii_only: bool = False) -> int:
    """Feed every line of a text file into a model.

    Args:
        model: The model to train
        filepath: Path to a UTF-8 text file. Relative paths are resolved
            against the corpora data directory.
        delimiters: Extra word delimiters besides whitespace
        ascii_only: Transliterate lines to ASCII before parsing

    Returns:
        int: Number of words parsed

    Raises:
        FileNotFoundError: If the file does not exist
    """
    corpus_path = os.path.join(CORPORA_PATH, filepath)
    if not os.path.exists(corpus_path):
        raise FileNotFoundError(f"Corpus file not found: {corpus_path}")

    lines = 0
    words = 0
    with open(corpus_path, encoding="utf-8") as f:
        for line in f:
            line = format_line(line, ascii_only)
            if not line:
                continue
            words += model.parse_line(line, delimiters)
            lines += 1

    logger.info(f"Loaded {words} words from {lines} lines of {corpus_path}")
    logger.info(f"Model now tracks {len(model)} characters")
    return words
