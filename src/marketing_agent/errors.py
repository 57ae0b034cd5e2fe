"""Error taxonomy for the analysis pipeline.

Every stage failure surfaces as a PipelineError subclass. `message` is safe to
show to the caller; `detail` is internal and only goes to the logs.
"""

from enum import Enum
from typing import Dict, List, Optional


class ErrorKind(str, Enum):
    INPUT_INVALID = "input_invalid"
    SCRAPE_FAILED = "scrape_failed"
    GENERATION_FAILED = "generation_failed"
    PARSE_FAILED = "parse_failed"
    UNKNOWN = "unknown"


class PipelineError(Exception):
    kind: ErrorKind = ErrorKind.UNKNOWN
    status_code: int = 500
    default_message: str = "Failed to analyze website"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)

    def to_response(self) -> Dict[str, str]:
        return {"error": self.message}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind.value!r}, message={self.message!r})"


class InputInvalid(PipelineError):
    kind = ErrorKind.INPUT_INVALID
    status_code = 400
    default_message = "URL and API key are required"


class ScrapeFailed(PipelineError):
    kind = ErrorKind.SCRAPE_FAILED
    default_message = "Failed to scrape website. Please check the URL and try again."


class GenerationFailed(PipelineError):
    kind = ErrorKind.GENERATION_FAILED
    default_message = "Failed to generate the marketing analysis. Please try again."


class ParseFailed(PipelineError):
    kind = ErrorKind.PARSE_FAILED
    default_message = "Failed to parse AI response. Please try again."


class SchemaViolation(ParseFailed):
    """The reply parsed as JSON but does not have the MarketingAnalysis shape."""

    default_message = "AI response did not match the expected analysis structure. Please try again."

    def __init__(self, paths: List[str], message: Optional[str] = None, detail: Optional[str] = None):
        self.paths = list(paths)
        super().__init__(message, detail or f"invalid or missing: {', '.join(self.paths)}")


class UnknownError(PipelineError):
    kind = ErrorKind.UNKNOWN
