"""
response_values - Dynamic values for templated REST request payloads

This package resolves the values substituted into outgoing request payload
templates, with support for:
- JSONPath extraction from the last JSON response
- Multi-match values joined in document order
- Fallback to runtime properties and environment variables
- Per-key error isolation so bad input never breaks the polling pipeline
"""

__version__ = "1.0.0"

from .config import load_config, ResponseValueProviderConfig
from .environment import EnvironmentValueResolver, ResolvedValue
from .extractor import JsonPathValueExtractor, MULTI_VALUE_SEPARATOR
from .http import Request, Response
from .outcome import Found, NotFound, EvaluationError, ValueSnapshot
from .properties import SYSTEM_PROPERTIES, set_property, get_property, clear_property
from .provider import ResponseValueProvider
from .cli import main

__all__ = [
    "load_config",
    "ResponseValueProviderConfig",
    "EnvironmentValueResolver",
    "ResolvedValue",
    "JsonPathValueExtractor",
    "MULTI_VALUE_SEPARATOR",
    "Request",
    "Response",
    "Found",
    "NotFound",
    "EvaluationError",
    "ValueSnapshot",
    "SYSTEM_PROPERTIES",
    "set_property",
    "get_property",
    "clear_property",
    "ResponseValueProvider",
    "main",
]
