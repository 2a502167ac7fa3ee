"""
Configuration module for response_values.

Uses Pydantic models for validation and parsing of configuration, either from
a JSON file or from the flat connector property form:

    rest.source.response.var.names = key1, key2
    rest.source.response.var.key1.jsonpath = $['results'][*]
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

PROPERTY_PREFIX = "rest.source.response.var."
NAMES_PROPERTY = PROPERTY_PREFIX + "names"
JSONPATH_PROPERTY = PROPERTY_PREFIX + "{name}.jsonpath"
DOCUMENT_ERROR_POLICY_PROPERTY = PROPERTY_PREFIX + "document.error.policy"

# "retain" keeps the previous cycle's values when a response body cannot be parsed,
# "clear" resolves every key to None for that cycle
DocumentErrorPolicy = Literal["retain", "clear"]


def split_names(value: Union[str, List[str], None]) -> List[str]:
    """
    Split a comma separated list of names, dropping blanks and duplicates.

    Args:
        value: Comma separated string or list of names

    Returns:
        Ordered list of unique names
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")

    names = []
    for name in value:
        name = str(name).strip()
        if not name:
            continue
        if name in names:
            logger.warning(f"Ignoring duplicate response variable name: {name}")
            continue
        names.append(name)
    return names


class ResponseValueProviderConfig(BaseModel):
    """Configuration for extracting values from responses."""
    names: List[str] = Field(default_factory=list, alias="responseVariableNames")
    jsonpaths: Dict[str, str] = Field(default_factory=dict, alias="responseVariableJsonPaths")
    document_error_policy: DocumentErrorPolicy = Field("retain", alias="documentErrorPolicy")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("names", mode="before")
    @classmethod
    def split_name_list(cls, value: Any) -> List[str]:
        return split_names(value)

    @model_validator(mode="after")
    def check_expressions(self) -> "ResponseValueProviderConfig":
        for name in self.names:
            if name not in self.jsonpaths:
                logger.warning(f"No JSONPath expression configured for response variable: {name}")
        for name in self.jsonpaths:
            if name not in self.names:
                logger.warning(f"JSONPath expression for {name} ignored, it is not a listed response variable")
        return self

    @property
    def response_variable_names(self) -> List[str]:
        return list(self.names)

    @property
    def response_variable_jsonpaths(self) -> Dict[str, str]:
        """JSONPath expressions for the listed names, in name order."""
        return {name: self.jsonpaths[name] for name in self.names if name in self.jsonpaths}

    @classmethod
    def from_properties(cls, props: Mapping[str, Any]) -> "ResponseValueProviderConfig":
        """
        Build configuration from flat connector properties.

        Args:
            props: Connector properties

        Returns:
            Parsed configuration
        """
        names = split_names(props.get(NAMES_PROPERTY))
        jsonpaths = {}
        for name in names:
            expression = props.get(JSONPATH_PROPERTY.format(name=name))
            if expression is not None:
                jsonpaths[name] = str(expression).strip()

        return cls(
            names=names,
            jsonpaths=jsonpaths,
            document_error_policy=props.get(DOCUMENT_ERROR_POLICY_PROPERTY, "retain"),
        )


def load_config(config_path: Union[str, Path]) -> ResponseValueProviderConfig:
    """
    Load configuration from JSON file.

    The file holds either the model fields or flat connector properties.

    Args:
        config_path: Path to configuration file

    Returns:
        Parsed configuration object
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.info(f"Loading configuration from: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict) and NAMES_PROPERTY in data:
        config = ResponseValueProviderConfig.from_properties(data)
    else:
        config = ResponseValueProviderConfig.model_validate(data)

    logger.info(f"Loaded {len(config.response_variable_jsonpaths)} response variables")

    return config
