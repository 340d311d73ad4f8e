import logging

logger = logging.getLogger(__name__)


def trim_low_value_entries(mapping, threshold) -> int:
    """Remove low-valued entries from a character-keyed numeric map.

    Works on a CharacterMap or a plain dict. Intended for periodic model
    compaction, not for the inference path.

    Args:
        mapping: The map to trim in place
        threshold: Entries with a value less than or equal to this are removed

    Returns:
        int: The number of removed entries

    Raises:
        ValueError: If threshold is less than or equal to 0
    """
    if threshold <= 0:
        raise ValueError(f"Threshold must be greater than 0, got {threshold}")

    trash = [key for key, value in mapping.items() if value <= threshold]
    for key in trash:
        del mapping[key]

    if trash:
        logger.debug(f"Trimmed {len(trash)} entries at or below {threshold}")
    return len(trash)
