# src/dyscorrect/core/analyzer.py
"""
Clients that produce BackendError lists for a text.

AnalysisClient - HTTP client for the dyslexia analysis service
LLMAnalyzer    - same contract, answered directly by an OpenAI model

Network failures surface as AnalysisServiceError. Nothing here retries.
"""

import json
import logging
import time

import httpx
import openai
from openai import OpenAI

from dyscorrect.config import Settings, get_settings
from dyscorrect.core.analysis import AnalyzeResult, BackendError
from dyscorrect.core.errors import AnalysisServiceError


logger = logging.getLogger(__name__)


def to_message(err: Exception) -> str:
    """Normalize an httpx error into a short human-readable message."""
    if isinstance(err, httpx.HTTPStatusError):
        detail = err.response.text or str(err)
        return f"HTTP {err.response.status_code}: {detail}"
    return str(err) or err.__class__.__name__


class AnalysisClient:
    def __init__(self, settings: Settings | None = None, http: httpx.Client | None = None):
        self.settings = settings or get_settings()
        self.http = http or httpx.Client(headers={"Content-Type": "application/json"})

    def _url(self, path: str) -> str:
        return self.settings.analysis_url.rstrip("/") + path

    def _gateway_url(self, path: str) -> str:
        return self.settings.gateway_api + path

    def analyze(self, text: str, debug: bool = False) -> AnalyzeResult:
        payload = {"text": text, "debug": debug, "include_correct_words": True}
        try:
            r = self.http.post(
                self._url("/analyze"), json=payload, timeout=self.settings.analysis_timeout
            )
            r.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("analysis request failed: %s", to_message(e))
            status = e.response.status_code if isinstance(e, httpx.HTTPStatusError) else None
            raise AnalysisServiceError(to_message(e), status) from e

        result = AnalyzeResult.from_response(r.json(), text)
        logger.info(
            "analysis complete: %d errors, model=%s", result.total_errors, result.model_used
        )
        return result

    def health(self) -> dict:
        """Check the service directly, then via the gateway."""
        try:
            r = self.http.get(self._url("/health"), timeout=self.settings.health_timeout)
            r.raise_for_status()
            return r.json()
        except httpx.HTTPError as e:
            logger.warning("direct health check failed: %s", to_message(e))

        try:
            r = self.http.get(self._gateway_url("/health"), timeout=self.settings.health_timeout)
            r.raise_for_status()
            return r.json()
        except httpx.HTTPError as e:
            logger.error("gateway health check failed: %s", to_message(e))
            raise AnalysisServiceError("AI Correction service unavailable") from e

    def patterns(self) -> list[dict]:
        try:
            r = self.http.get(self._gateway_url("/patterns"), timeout=self.settings.health_timeout)
            r.raise_for_status()
        except httpx.HTTPError as e:
            raise AnalysisServiceError(to_message(e)) from e
        return r.json().get("patterns", [])


ANALYSIS_SYSTEM_PROMPT = """You are a dyslexia-aware writing analysis system.

Given an essay, report every misspelled or malformed word.
For each error give the word exactly as written, a suggestion,
the dyslexia pattern (e.g. "letter reversal", "omission", "phonetic"),
a short explanation and a confidence between 0 and 1.
Report one entry per occurrence. Do not report correct words.

Respond with JSON.

Example:
Input: "I has a bal."
Output: {"data": [
  {"word": "has", "type": "error", "suggestion": "have",
   "dyslexiaPattern": "grammar", "explanation": "subject-verb agreement", "confidence": 0.9},
  {"word": "bal", "type": "error", "suggestion": "ball",
   "dyslexiaPattern": "omission", "explanation": "missing letter", "confidence": 0.95}
]}
"""


class LLMAnalyzer:
    def __init__(self, openai_client: OpenAI | None = None, model: str = "gpt-4o-mini"):
        self.client = openai_client or OpenAI()
        self.model = model

    def analyze(self, text: str, debug: bool = False) -> AnalyzeResult:
        if not text.strip():
            return AnalyzeResult(success=True, original_text=text, corrected_text=text)

        started = time.monotonic()
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
                    {"role": "user", "content": text},
                ],
                response_format={"type": "json_object"},
            )
            result = json.loads(response.choices[0].message.content)
        except (openai.OpenAIError, json.JSONDecodeError) as e:
            logger.error("LLM analysis failed: %s", e)
            raise AnalysisServiceError(str(e)) from e

        words = [
            BackendError.from_dict({**item, "source": item.get("source") or "llm"})
            for item in result.get("data", [])
            if item.get("word")
        ]

        return AnalyzeResult(
            success=True,
            original_text=text,
            corrected_text=text,
            words=words,
            processing_time_ms=(time.monotonic() - started) * 1000,
            model_used=self.model,
        )


def get_analyzer(settings: Settings | None = None):
    settings = settings or get_settings()
    if settings.analyzer == "openai":
        return LLMAnalyzer(model=settings.openai_model)
    return AnalysisClient(settings)
