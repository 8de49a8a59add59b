"""Tests for backend contracts and the analysis clients."""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai
import pytest

from dyscorrect.config import Settings
from dyscorrect.core.analysis import AnalyzeResult, BackendError, Correction, Position
from dyscorrect.core.analyzer import AnalysisClient, LLMAnalyzer, to_message
from dyscorrect.core.errors import AnalysisServiceError


ANALYZE_PAYLOAD = {
    "success": True,
    "data": [
        {"word": "I", "type": "correct"},
        {"word": "has", "type": "error", "suggestion": "have",
         "dyslexiaPattern": "grammar", "confidence": 0.9},
        {"word": "bal", "type": "error", "suggestion": "ball",
         "dyslexia_pattern": "omission", "source": "rules"},
    ],
    "correctedText": "I have a ball.",
    "processingTimeMs": 120,
    "modelUsed": "akura-8b",
}


@pytest.fixture
def settings():
    return Settings(analysis_url="http://svc/api/v1", gateway_url="http://gw")


def make_client(settings, handler):
    return AnalysisClient(settings, http=httpx.Client(transport=httpx.MockTransport(handler)))


# === Contracts ===

def test_backend_error_accepts_both_pattern_keys():
    a = BackendError.from_dict({"word": "x", "dyslexiaPattern": "reversal"})
    b = BackendError.from_dict({"word": "x", "dyslexia_pattern": "reversal"})
    assert a.pattern == b.pattern == "reversal"
    assert a.type == "error"
    assert a.is_error


def test_backend_error_correct_type():
    assert not BackendError.from_dict({"word": "x", "type": "correct"}).is_error


def test_correction_from_nested_position():
    c = Correction.from_dict({
        "word": "bal", "suggestion": "ball", "pattern": "omission",
        "confidence": 0.7, "position": {"start": 8, "end": 11},
    })
    assert c.position == Position(8, 11)
    assert not c.accepted
    assert c.text == "ball"


def test_analyze_result_normalizes_casing():
    result = AnalyzeResult.from_response(ANALYZE_PAYLOAD, "I has a bal.")
    assert result.original_text == "I has a bal."
    assert result.corrected_text == "I have a ball."
    assert result.model_used == "akura-8b"
    assert result.processing_time_ms == 120
    assert result.total_errors == 2
    assert [e.word for e in result.errors] == ["has", "bal"]


def test_analyze_result_snake_case():
    payload = {"success": True, "data": [], "corrected_text": "x", "model_used": "m"}
    result = AnalyzeResult.from_response(payload, "x")
    assert result.model_used == "m"
    assert result.words == []


# === HTTP client ===

def test_analyze_posts_text(settings):
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=ANALYZE_PAYLOAD)

    result = make_client(settings, handler).analyze("I has a bal.")

    assert seen["url"] == "http://svc/api/v1/analyze"
    assert seen["body"] == {"text": "I has a bal.", "debug": False, "include_correct_words": True}
    assert result.total_errors == 2


def test_analyze_http_error(settings):
    client = make_client(settings, lambda request: httpx.Response(500, text="boom"))
    with pytest.raises(AnalysisServiceError) as exc:
        client.analyze("text")
    assert str(exc.value) == "HTTP 500: boom"
    assert exc.value.status_code == 500


def test_analyze_connection_error(settings):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AnalysisServiceError, match="connection refused"):
        make_client(settings, handler).analyze("text")


def test_health_direct(settings):
    client = make_client(settings, lambda request: httpx.Response(200, json={"status": "healthy"}))
    assert client.health() == {"status": "healthy"}


def test_health_falls_back_to_gateway(settings):
    def handler(request):
        if request.url.host == "svc":
            return httpx.Response(503)
        assert request.url.path == "/ai-recorrection-workbench/api/v1/health"
        return httpx.Response(200, json={"status": "via-gateway"})

    assert make_client(settings, handler).health() == {"status": "via-gateway"}


def test_health_unavailable(settings):
    client = make_client(settings, lambda request: httpx.Response(503))
    with pytest.raises(AnalysisServiceError, match="unavailable"):
        client.health()


def test_patterns(settings):
    payload = {"patterns": [{"name": "reversal", "description": "b/d swaps"}]}

    def handler(request):
        assert request.url.path == "/ai-recorrection-workbench/api/v1/patterns"
        return httpx.Response(200, json=payload)

    assert make_client(settings, handler).patterns() == payload["patterns"]


def test_to_message_plain_error():
    assert to_message(ValueError("bad")) == "bad"


# === LLM analyzer ===

def fake_openai(content: dict):
    client = MagicMock()
    message = SimpleNamespace(content=json.dumps(content))
    client.chat.completions.create.return_value = SimpleNamespace(
        choices=[SimpleNamespace(message=message)]
    )
    return client


def test_llm_analyzer_parses_errors():
    client = fake_openai({"data": [
        {"word": "bal", "type": "error", "suggestion": "ball", "dyslexiaPattern": "omission"},
        {"suggestion": "missing word is skipped"},
    ]})
    result = LLMAnalyzer(client).analyze("a bal")

    assert result.success
    assert result.model_used == "gpt-4o-mini"
    assert [(e.word, e.suggestion, e.source) for e in result.errors] == [("bal", "ball", "llm")]
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["response_format"] == {"type": "json_object"}


def test_llm_analyzer_empty_text_skips_call():
    client = fake_openai({"data": []})
    result = LLMAnalyzer(client).analyze("   ")
    assert result.words == []
    client.chat.completions.create.assert_not_called()


def test_llm_analyzer_connection_error():
    client = MagicMock()
    client.chat.completions.create.side_effect = openai.APIConnectionError(
        request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    )
    with pytest.raises(AnalysisServiceError):
        LLMAnalyzer(client).analyze("a bal")


def test_llm_analyzer_non_json_reply():
    client = MagicMock()
    client.chat.completions.create.return_value = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content="not json"))]
    )
    with pytest.raises(AnalysisServiceError):
        LLMAnalyzer(client).analyze("a bal")


# === Settings ===

def test_settings_validation():
    with pytest.raises(ValueError):
        Settings(analyzer="nope")
    with pytest.raises(ValueError):
        Settings(redis_port=0)
    with pytest.raises(ValueError):
        Settings(lock_wait=-1)
    assert Settings(log_level="debug").log_level == "DEBUG"
