"""CORS policy enforcement for Starlette / FastAPI applications."""

from corsguard.core.exceptions import ConfigError, CORSForbiddenError
from corsguard.cors.config import CORSConfig, default_config
from corsguard.cors.handler import CORSHandler, CORSResult, CORSState, build
from corsguard.cors.matcher import OriginMatcher
from corsguard.middleware import CORSMiddleware

__all__ = [
    "CORSConfig",
    "CORSForbiddenError",
    "CORSHandler",
    "CORSMiddleware",
    "CORSResult",
    "CORSState",
    "ConfigError",
    "OriginMatcher",
    "build",
    "default_config",
]
