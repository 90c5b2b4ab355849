"""Configuration and error types shared by the focus components."""

from get_everything_done.core.config import Config, SessionConfig, get_config
from get_everything_done.core.errors import GetEverythingDoneError, InvalidInput, NotFound

__all__ = [
    "Config",
    "SessionConfig",
    "get_config",
    "GetEverythingDoneError",
    "InvalidInput",
    "NotFound",
]
