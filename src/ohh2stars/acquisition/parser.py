from dataclasses import dataclass, field
from typing import List

from loguru import logger

from ..domain.models import HandRecord, OhhFile
from ..errors import ConversionError

CHUNK_DELIMITER = "\n\n"
PREVIEW_CHARS = 200
NO_HANDS_MESSAGE = "no valid hands could be parsed. please check your file format."

# pydantic.ValidationError and malformed JSON are both ValueErrors; oversized
# numbers and deep nesting can surface as the other two
CHUNK_ERRORS = (ValueError, OverflowError, RecursionError)


@dataclass
class ChunkFailure:
    index: int
    preview: str
    container_error: str
    hand_error: str


@dataclass
class ParseResult:
    hands: List[HandRecord] = field(default_factory=list)
    failures: List[ChunkFailure] = field(default_factory=list)


def split_chunks(text: str) -> List[str]:
    """Split on blank lines, the hand boundary OHH exporters write between documents."""
    return text.split(CHUNK_DELIMITER)


def parse_chunks(text: str) -> ParseResult:
    logger.debug(f"parse_chunks called with {len(text)} bytes")
    result = ParseResult()

    for idx, chunk in enumerate(split_chunks(text)):
        if not chunk.strip():
            logger.debug(f"chunk {idx}: blank, skipped")
            continue

        try:
            hands = OhhFile.model_validate_json(chunk).records
            logger.debug(f"parsed container chunk {idx} ({len(hands)} hands)")
            result.hands.extend(hands)
            continue
        except CHUNK_ERRORS as e1:
            container_error = e1

        try:
            hand = HandRecord.model_validate_json(chunk)
            logger.debug(f"parsed hand chunk {idx}")
            result.hands.append(hand)
        except CHUNK_ERRORS as e2:
            failure = ChunkFailure(
                index=idx,
                preview=chunk[:PREVIEW_CHARS],
                container_error=str(container_error),
                hand_error=str(e2),
            )
            logger.warning(
                f"chunk {idx}: failed to parse (container: {failure.container_error}, "
                f"hand: {failure.hand_error}). preview: {failure.preview}"
            )
            result.failures.append(failure)

    return result


def parse(text: str) -> List[HandRecord]:
    """Decode every hand in ``text``; raises ConversionError when none decode."""
    result = parse_chunks(text)
    if not result.hands:
        raise ConversionError(NO_HANDS_MESSAGE)
    return result.hands
