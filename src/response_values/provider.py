"""
Response value provider for response_values.

Looks up values used to populate dynamic payloads. Values are extracted from
the last JSON response with JSONPath and, if not found there, looked up in the
runtime properties and then in environment variables.

Each connector task owns one provider.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from .config import ResponseValueProviderConfig
from .environment import EnvironmentValueResolver, ResolvedValue
from .extractor import JsonPathValueExtractor
from .http import Request, Response
from .outcome import ValueSnapshot

logger = logging.getLogger(__name__)


class ResponseValueProvider:
    """Combines response extraction with property and environment fallback."""

    def __init__(
        self,
        resolver: Optional[EnvironmentValueResolver] = None,
        extractor: Optional[JsonPathValueExtractor] = None,
    ):
        self.resolver = resolver or EnvironmentValueResolver()
        self.extractor = extractor or JsonPathValueExtractor()
        self.snapshot = ValueSnapshot.empty()

    def configure(self, props: Mapping[str, Any]) -> ResponseValueProviderConfig:
        """
        Configure this instance from flat connector properties.

        Args:
            props: The configuration properties

        Returns:
            The parsed configuration
        """
        config = ResponseValueProviderConfig.from_properties(props)
        self.apply_config(config)
        return config

    def apply_config(self, config: ResponseValueProviderConfig) -> None:
        self.extractor.document_error_policy = config.document_error_policy
        self.set_expressions(config.response_variable_jsonpaths)

    def set_expressions(self, jsonpaths: Mapping[str, str]) -> None:
        """Replace the JSONPaths and forget values extracted under the old ones."""
        self.extractor.set_expressions(jsonpaths)
        self.snapshot = ValueSnapshot.empty()

    def extract_values(self, request: Optional[Request], response: Response) -> ValueSnapshot:
        """
        Extract values from the last response.

        Args:
            request: The last request made
            response: The last response received

        Returns:
            The snapshot now used for lookups
        """
        self.snapshot = self.extractor.extract_values(request, response, self.snapshot)
        return self.snapshot

    def resolve(self, key: str) -> ResolvedValue:
        return self.resolver.resolve(key, self.snapshot)

    def lookup_value(self, key: str) -> Optional[str]:
        """
        Look up the value to substitute for a template placeholder.

        Args:
            key: The placeholder name

        Returns:
            The value, or None if it is not defined anywhere
        """
        return self.resolver.lookup_value(key, self.snapshot)

    @property
    def parameters(self) -> Dict[str, Optional[str]]:
        """Values extracted by the last cycle, None for keys without a match."""
        return self.snapshot.as_dict()
