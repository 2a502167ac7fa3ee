"""
Environment value resolution for response_values.

Answers "what value does this key currently have" by consulting, in order,
the values extracted from the last response, the process-wide runtime
properties and the environment variables.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .properties import SYSTEM_PROPERTIES

logger = logging.getLogger(__name__)

SOURCE_EXTRACTED = "extracted"
SOURCE_PROPERTY = "property"
SOURCE_ENVIRONMENT = "environment"
SOURCE_MISSING = "missing"


@dataclass(frozen=True)
class ResolvedValue:
    """A looked-up value and the tier that supplied it."""
    key: str
    value: Optional[str]
    source: str

    @property
    def found(self) -> bool:
        return self.value is not None


class EnvironmentValueResolver:
    """Three-tier lookup: extracted values, runtime properties, environment."""

    def __init__(
        self,
        properties: Optional[Mapping[str, str]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize EnvironmentValueResolver.

        Args:
            properties: Runtime properties to consult, defaults to the process registry
            environ: Environment variables to consult, defaults to os.environ
        """
        self.properties = SYSTEM_PROPERTIES if properties is None else properties
        self.environ = os.environ if environ is None else environ

    def resolve(self, key: str, snapshot: Optional[Mapping[str, Optional[str]]] = None) -> ResolvedValue:
        """
        Resolve a key and report which tier the value came from.

        Args:
            key: Name of the value to resolve
            snapshot: Values extracted from the most recent response

        Returns:
            ResolvedValue, with value None and source "missing" if no tier holds the key
        """
        if snapshot is not None:
            value = snapshot.get(key)
            if value is not None:
                return ResolvedValue(key, value, SOURCE_EXTRACTED)

        value = self.properties.get(key)
        if value is not None:
            logger.debug(f"Variable {key} resolved from runtime properties")
            return ResolvedValue(key, value, SOURCE_PROPERTY)

        value = self.environ.get(key)
        if value is not None:
            logger.debug(f"Variable {key} resolved from environment")
            return ResolvedValue(key, value, SOURCE_ENVIRONMENT)

        return ResolvedValue(key, None, SOURCE_MISSING)

    def lookup_value(self, key: str, snapshot: Optional[Mapping[str, Optional[str]]] = None) -> Optional[str]:
        """
        Look up the current value of a key.

        Args:
            key: Name of the value to look up
            snapshot: Values extracted from the most recent response

        Returns:
            The value, or None if it is not defined anywhere
        """
        return self.resolve(key, snapshot).value
