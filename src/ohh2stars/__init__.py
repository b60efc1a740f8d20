from loguru import logger

from .converter import HAND_SEPARATOR, convert, convert_file
from .errors import ConfigError, ConversionError, OhhError

# silent unless the host application opts in
logger.disable("ohh2stars")

__all__ = [
    "HAND_SEPARATOR",
    "ConfigError",
    "ConversionError",
    "OhhError",
    "convert",
    "convert_file",
]
