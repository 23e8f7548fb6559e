"""Project-wide enums and report defaults."""

from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"

    @property
    def renders_json(self) -> bool:
        """Deployed environments log JSON lines instead of console output."""
        return self in (EnumEnvironment.STAGING, EnumEnvironment.PRODUCTION)


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Report days start at this local hour, so a night shift belongs to one day.
DEFAULT_DAY_BOUNDARY_HOUR = 6
DEFAULT_REPORT_TIMEZONE = "UTC"
DEFAULT_RANGE_DAYS = 14
DEFAULT_LABEL_FORMAT = "%d-%m-%Y"

SECONDS_PER_HOUR = 3600.0
