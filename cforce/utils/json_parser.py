"""
JSON decoding for model responses.
"""
import json
from typing import Any, Dict


class JSONParser:
    """Strict decoder for JSON-only model output."""

    @staticmethod
    def decode_object(text: str) -> Dict[str, Any]:
        """Decode text that must be exactly one JSON object.

        No fragment extraction is attempted: prose around the object, a
        truncated document, a top-level array or runaway nesting all raise
        ``ValueError``.
        """
        try:
            data = json.loads(text.strip())
        except RecursionError as e:
            raise ValueError("JSON nesting too deep") from e
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return data
