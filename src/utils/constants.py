import pathlib

SECONDARY_CACHE_SIZE = 32  # Max snippets held in the FIFO tier before eviction
DEFAULT_DECAY = 0.5
DEFAULT_CASE_SENSITIVE = True

WHITESPACE_PATTERN = r"\s+"

PROJECT_ROOT = pathlib.Path(__file__).parent.parent.parent
DATA_PATH = PROJECT_ROOT / "data"
CORPORA_PATH = DATA_PATH / "corpora"
