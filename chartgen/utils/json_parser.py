"""
JSON Parser utility for extracting JSON from LLM responses.
"""
import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


class JSONParser:
    """Helper class to extract a JSON object from free-form LLM text."""

    @staticmethod
    def find_object(text: str) -> str | None:
        """Return the first balanced ``{...}`` substring of *text*, or None.

        Braces inside JSON string literals do not count towards the balance.
        """
        start = text.find("{")
        if start == -1:
            return None

        depth = 0
        in_string = False
        escaped = False
        for index in range(start, len(text)):
            char = text[index]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue
            if char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start : index + 1]
        return None

    @staticmethod
    def extract_json(text: Any) -> dict[str, Any] | None:
        """Parse the first balanced JSON object in *text*.

        Returns None when there is no balanced object, when it does not parse,
        or when it parses to something other than an object. Callers decide
        whether that means fail-open or fail-closed.
        """
        if not isinstance(text, str):
            return None

        candidate = JSONParser.find_object(text)
        if candidate is None:
            logger.warning("JSONParser: no balanced JSON object in text (%d chars)", len(text))
            return None

        try:
            parsed = json.loads(candidate)
        except (ValueError, RecursionError) as e:
            logger.warning("JSONParser: could not decode JSON object: %s", e)
            return None

        if not isinstance(parsed, dict):
            return None
        return parsed
