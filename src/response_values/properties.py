"""
Process-wide runtime properties for response_values.

Provides a global property registry consulted after extracted values and
before environment variables.
"""

import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)

# Global registry of runtime properties shared by every resolver in the process
SYSTEM_PROPERTIES: Dict[str, str] = {}


def set_property(key: str, value: str) -> Optional[str]:
    """
    Set a runtime property.

    Args:
        key: Property name
        value: Property value

    Returns:
        The previous value, or None if the property was not set
    """
    previous = SYSTEM_PROPERTIES.get(key)
    SYSTEM_PROPERTIES[key] = str(value)
    return previous


def get_property(key: str) -> Optional[str]:
    """Get a runtime property, or None if it is not set."""
    return SYSTEM_PROPERTIES.get(key)


def clear_property(key: str) -> Optional[str]:
    """
    Remove a runtime property.

    Args:
        key: Property name

    Returns:
        The removed value, or None if the property was not set
    """
    return SYSTEM_PROPERTIES.pop(key, None)


def clear_properties() -> None:
    """Clear all runtime properties."""
    SYSTEM_PROPERTIES.clear()


def get_properties() -> Dict[str, str]:
    """
    Get a copy of all runtime properties.

    Returns:
        Dictionary of property names to values
    """
    return SYSTEM_PROPERTIES.copy()
