import time
from typing import Optional, Union

from ..config import get_settings
from ..errors import InputInvalid, PipelineError, UnknownError
from ..llm.client import llm_client
from ..llm.normalize import normalize
from ..llm.prompts import build_prompt
from ..llm.schema import MarketingAnalysis
from ..log import get_logger
from ..retrieval.extract import extract_page

settings = get_settings()
logger = get_logger("pipeline")

MIN_GENERATION_TIMEOUT = 1.0
TIMEOUT_MESSAGE = "Analysis timed out. Please try again."

class Pipeline:
    """
    Validate -> Extracting -> Prompting -> Generating -> Normalizing.
    The first failing stage ends the run; later stages never start.
    """

    def analyze(
        self,
        url: str,
        api_key: str,
        model: Optional[str] = None,
        provider: Optional[str] = None,
    ) -> MarketingAnalysis:
        """Runs every stage and raises the failing stage's PipelineError unchanged."""
        url = (url or "").strip()
        api_key = (api_key or "").strip()
        if not url or not api_key:
            raise InputInvalid(detail=f"url present={bool(url)}, api_key present={bool(api_key)}")

        deadline = time.monotonic() + settings.PIPELINE_TIMEOUT
        logger.info(f"Analyzing {url}")

        # 1. Extract
        self._check_deadline(deadline, "extracting")
        digest = extract_page(url)

        # 2. Prompt
        prompt = build_prompt(digest)
        logger.info(f"Prompt assembled ({len(prompt)} chars)")

        # 3. Generate
        remaining = self._check_deadline(deadline, "generating")
        raw = llm_client.generate(
            prompt,
            api_key,
            model=model,
            provider=provider,
            timeout=max(remaining, MIN_GENERATION_TIMEOUT),
        )

        # 4. Normalize
        self._check_deadline(deadline, "normalizing")
        analysis = normalize(raw)
        logger.info(f"Analysis completed for {url}")
        return analysis

    def run(
        self,
        url: str,
        api_key: str,
        model: Optional[str] = None,
        provider: Optional[str] = None,
    ) -> Union[MarketingAnalysis, PipelineError]:
        """Same as analyze(), but failures are returned instead of raised."""
        try:
            return self.analyze(url, api_key, model=model, provider=provider)
        except PipelineError as e:
            logger.warning(f"Analysis failed [{e.kind.value}]: {e.message} ({e.detail})")
            return e
        except Exception as e:
            logger.exception("Pipeline error")
            return UnknownError(detail=f"{e.__class__.__name__}: {e}")

    @staticmethod
    def _check_deadline(deadline: float, stage: str) -> float:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise UnknownError(TIMEOUT_MESSAGE, detail=f"deadline passed before {stage}")
        return remaining

pipeline = Pipeline()
