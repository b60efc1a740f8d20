class OhhError(Exception):
    """Base class for everything this package raises on purpose."""


class ConversionError(OhhError):
    """Nothing could be converted (no hands decoded, unreadable file)."""


class ConfigError(OhhError):
    pass
