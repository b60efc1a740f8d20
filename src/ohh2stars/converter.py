from pathlib import Path
from typing import Union

from loguru import logger

from .acquisition.parser import parse
from .errors import ConversionError
from .export.pokerstars import PokerStarsWriter

HAND_SEPARATOR = "\n\n\n\n"


def convert(content: str) -> str:
    """Convert OHH text (one or more blank-line separated documents) to PokerStars text.

    Raises ConversionError if not a single hand could be decoded.
    """
    logger.debug(f"convert called with {len(content)} bytes")

    hands = parse(content)

    logger.debug(f"Converting {len(hands)} hands to PokerStars format")
    writer = PokerStarsWriter()
    result = HAND_SEPARATOR.join(writer.write(h) for h in hands)
    logger.info(f"Conversion complete: {len(hands)} hands converted, output size: {len(result)} bytes")

    return result


def convert_file(path: Union[str, Path]) -> str:
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read {path}: {e}")
        raise ConversionError(f"Failed to read file: {e}") from e
    return convert(content)
