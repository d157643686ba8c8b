from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EnumLogFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class EnumCalculator(str, Enum):
    """Identifiers of the nine published metric sections."""

    PRODUCTION = "production"
    ENERGY = "energy"
    STEAM = "steam"
    AVAILABILITY = "availability"
    QUALITY = "quality"
    RECIPE = "recipe"
    SILOS = "silos"
    RELIABILITY = "reliability"
    PACKAGING = "packaging"
