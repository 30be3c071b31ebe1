"""Response validator: raw model text to a typed pipeline result."""

import logging

from pydantic import ValidationError

from cforce.config.constants import PARSE_EXCERPT_CHARS, PipelineKind
from cforce.core.exceptions import ParseError
from cforce.services.pipelines.models import RESULT_MODELS, PipelineResult
from cforce.utils.json_parser import JSONParser

logger = logging.getLogger(__name__)


def parse_result(kind: PipelineKind, raw_text: str) -> PipelineResult | ParseError:
    """
    Parse raw model output for one pipeline kind.

    Never raises. A decode failure or a container shape mismatch is returned
    as a ``ParseError`` carrying an excerpt of the offending text.
    """
    excerpt = raw_text[:PARSE_EXCERPT_CHARS]
    try:
        data = JSONParser.decode_object(raw_text)
    except ValueError as e:
        logger.warning("%s output is not a JSON object: %s | excerpt=%r", kind.value, e, excerpt)
        return ParseError(kind, excerpt, "invalid JSON")

    try:
        return RESULT_MODELS[kind].model_validate(data)
    except ValidationError as e:
        logger.warning(
            "%s output does not match schema (%d errors) | excerpt=%r",
            kind.value,
            e.error_count(),
            excerpt,
        )
        return ParseError(kind, excerpt, f"schema mismatch ({e.error_count()} errors)")
