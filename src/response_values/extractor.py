"""
JSONPath value extraction for response_values.

Parses the body of the last HTTP response once and evaluates a fixed set of
per-key JSONPath expressions against it. Failures never escape: they are
logged and surface as keys without a value.
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from jsonpath_ng.jsonpath import DatumInContext, Fields, Index, JSONPath, Slice
from jsonpath_ng.ext import parse as parse_jsonpath

from .config import DocumentErrorPolicy
from .http import Request, Response
from .outcome import EvaluationError, Found, NotFound, Outcome, ValueSnapshot

logger = logging.getLogger(__name__)

MULTI_VALUE_SEPARATOR = ","

# Longest slice of a rejected payload written to the log
PAYLOAD_LOG_LIMIT = 500


def stringify(value: Any) -> str:
    """Render one JSONPath match, strings as-is and anything else as compact JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class Wildcard(JSONPath):
    """
    ``[*]``: every element of an array or every member value of an object.

    Scalars have no children, so they match nothing.
    """

    def find(self, datum):
        datum = DatumInContext.wrap(datum)
        if isinstance(datum.value, list):
            return [DatumInContext(value, path=Index(i), context=datum) for i, value in enumerate(datum.value)]
        if isinstance(datum.value, dict):
            return [DatumInContext(value, path=Fields(key), context=datum) for key, value in datum.value.items()]
        return []

    def update(self, data, val):
        raise NotImplementedError("Wildcard expressions are read only")

    def __str__(self):
        return "[*]"

    def __repr__(self):
        return "Wildcard()"

    def __eq__(self, other):
        return isinstance(other, Wildcard)

    def __hash__(self):
        return hash("[*]")


def replace_wildcards(expression: JSONPath) -> JSONPath:
    """Swap jsonpath-ng's open ``[*]`` slice, which returns objects and scalars whole, for Wildcard."""
    if isinstance(expression, Slice) and expression.start is None and expression.end is None and expression.step is None:
        return Wildcard()
    for side in ("left", "right"):
        child = getattr(expression, side, None)
        if isinstance(child, JSONPath):
            setattr(expression, side, replace_wildcards(child))
    return expression


def compile_jsonpath(expression: str) -> JSONPath:
    return replace_wildcards(parse_jsonpath(expression))


def describe_request(request: Any) -> str:
    if request is None:
        return ""
    return f" for request {getattr(request, 'url', request)}"


class JsonPathValueExtractor:
    """Extracts named values from JSON responses using compiled JSONPath expressions."""

    def __init__(
        self,
        jsonpaths: Optional[Mapping[str, str]] = None,
        document_error_policy: DocumentErrorPolicy = "retain",
    ):
        """
        Initialize JsonPathValueExtractor.

        Args:
            jsonpaths: Map of key names to JSONPath expressions
            document_error_policy: What a cycle yields when the body cannot be parsed
        """
        self.document_error_policy = document_error_policy
        self.rules: Dict[str, JSONPath] = {}
        self.rejected: List[str] = []
        self.set_expressions(jsonpaths or {})

    def set_expressions(self, jsonpaths: Mapping[str, str]) -> None:
        """
        Replace the JSONPaths used for value extraction.

        Expressions that do not compile are logged and left out, the rest stay active.

        Args:
            jsonpaths: Map of key names to JSONPath expressions
        """
        self.rules = {}
        self.rejected = []
        for key, expression in jsonpaths.items():
            self.add_expression(key, expression)

    def add_expression(self, key: str, expression: str) -> bool:
        """Compile and register one expression, returning False if it was rejected."""
        try:
            self.rules[key] = compile_jsonpath(expression)
            return True
        except Exception as e:
            logger.error(f"The JSONPath expression '{expression}' could not be compiled: {e}")
            self.rules.pop(key, None)
            self.rejected.append(key)
            return False

    def extract_values(
        self,
        request: Optional[Request],
        response: Response,
        previous: Optional[ValueSnapshot] = None,
    ) -> ValueSnapshot:
        """
        Extract values from the response using the JSONPaths.

        Args:
            request: The last request made, used for logging only
            response: The last response received, anything with ``get_payload()``
            previous: Snapshot of the previous cycle

        Returns:
            A new snapshot holding every active key, or the previous snapshot
            when the body could not be parsed and the policy is "retain"
        """
        if previous is None:
            previous = ValueSnapshot.empty()

        payload = None
        try:
            payload = response.get_payload()
            document = json.loads(payload)
        except Exception as e:
            logger.error(
                f"The JSON could not be parsed{describe_request(request)}: "
                f"{repr(payload)[:PAYLOAD_LOG_LIMIT]}: {type(e).__name__}: {e}"
            )
            if self.document_error_policy == "clear":
                return ValueSnapshot({key: NotFound() for key in self.rules}, document_error=True)
            return previous.skipped()

        outcomes = {key: self.evaluate(key, document, expression) for key, expression in self.rules.items()}
        return ValueSnapshot(outcomes)

    def evaluate(self, key: str, document: Any, expression: JSONPath) -> Outcome:
        """
        Extract the value for a given key.

        Where the JSONPath yields more than one result a comma separated list is returned.

        Args:
            key: The name of the key
            document: The parsed response
            expression: The compiled JSONPath used to find the value

        Returns:
            Found with the value, NotFound, or EvaluationError
        """
        try:
            matches = [match.value for match in expression.find(document)]
            value = MULTI_VALUE_SEPARATOR.join(stringify(match) for match in matches) if matches else None
        except Exception as e:
            logger.error(f"The JSONPath expression '{expression}' for {key} could not be evaluated: {e}")
            return EvaluationError(f"{type(e).__name__}: {e}")

        logger.info(f"Variable {key} was assigned the value {value}")
        if value is None:
            return NotFound()
        return Found(value)
