"""Exception hierarchy for the intelligence core."""

from cforce.config.constants import PipelineKind


class IntelCoreError(Exception):
    """Base class for every error raised by the core."""


class GatewayError(IntelCoreError):
    """The remote model call failed (transport, auth or rate limit; cause is opaque)."""


class ParseError(IntelCoreError):
    """The model answered, but its output is not a well-formed result."""

    def __init__(self, kind: PipelineKind, raw_excerpt: str, reason: str = "") -> None:
        self.kind = kind
        self.raw_excerpt = raw_excerpt
        self.reason = reason
        super().__init__(f"{kind.value} output could not be parsed: {reason or 'invalid JSON'}")


class PipelineError(IntelCoreError):
    """A pipeline run failed. The original GatewayError or ParseError is chained as __cause__."""

    def __init__(self, kind: PipelineKind) -> None:
        self.kind = kind
        super().__init__(f"{kind.value} pipeline failed")

    @property
    def is_parse_failure(self) -> bool:
        return isinstance(self.__cause__, ParseError)
