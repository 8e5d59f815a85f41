"""Tests for codecrafter/llm/generation_client.py."""

from types import SimpleNamespace

import pytest

from codecrafter.errors import FatalServiceError, TransientServiceError
from codecrafter.llm.azure_openai_client import normalize_response_text
from codecrafter.llm.generation_client import GenerationClient, classify_failure
from tests.conftest import OverloadError, ScriptedService

FENCED = "```jsx\nexport default function Card() { return <div/>; }\n```"


# ── Retry policy ──────────────────────────────────────────────────────────────

class TestRetryPolicy:

    def test_first_call_success(self, make_client, react_request, sleeps, notifier):
        client, service = make_client([FENCED])
        result = client.generate(react_request)

        assert result.ok
        assert result.raw_text == FENCED
        assert result.attempts == 1
        assert sleeps == []
        assert notifier.of("info") == []

    def test_recovers_on_third_attempt(self, make_client, react_request, sleeps, notifier):
        client, service = make_client([OverloadError(), OverloadError(), FENCED])
        result = client.generate(react_request)

        assert result.ok
        assert result.raw_text == FENCED
        assert result.attempts == 3
        assert service.calls == 3
        assert len(notifier.of("info")) == 2

    def test_backoff_grows_linearly(self, make_client, react_request, sleeps):
        client, _ = make_client([OverloadError(), OverloadError(), FENCED])
        client.generate(react_request)
        assert sleeps == [2.0, 4.0]

    def test_exhausted_retries_are_unavailable(self, make_client, react_request, sleeps, notifier):
        client, service = make_client([OverloadError(), OverloadError(), OverloadError()])
        result = client.generate(react_request)

        assert not result.ok
        assert result.error.kind == "unavailable"
        assert result.error.is_overload
        assert result.attempts == 3
        assert service.calls == 3
        # no wait or notice after the final attempt
        assert sleeps == [2.0, 4.0]
        assert len(notifier.of("info")) == 2

    def test_fatal_error_is_not_retried(self, make_client, react_request, sleeps, notifier):
        client, service = make_client([ValueError("400 Bad Request: invalid prompt"), FENCED])
        result = client.generate(react_request)

        assert not result.ok
        assert result.error.kind == "other"
        assert "invalid prompt" in result.error.message
        assert result.attempts == 1
        assert service.calls == 1
        assert sleeps == []
        assert notifier.of("info") == []

    def test_fatal_after_transient_stops(self, make_client, react_request):
        client, service = make_client([OverloadError(), RuntimeError("quota exceeded")])
        result = client.generate(react_request)

        assert result.error.kind == "other"
        assert result.attempts == 2
        assert service.calls == 2

    def test_single_attempt_overload_is_overloaded(self, make_client, react_request, sleeps):
        client, _ = make_client([OverloadError()], max_attempts=1)
        result = client.generate(react_request)

        assert result.error.kind == "overloaded"
        assert result.attempts == 1
        assert sleeps == []

    def test_empty_response_is_fatal(self, make_client, react_request):
        client, service = make_client(["   ", FENCED])
        result = client.generate(react_request)

        assert result.error.kind == "other"
        assert service.calls == 1

    def test_same_prompt_sent_on_every_attempt(self, make_client, react_request):
        client, service = make_client([OverloadError(), FENCED])
        client.generate(react_request)
        assert service.prompts[0] == service.prompts[1]
        assert "a pricing card with three tiers" in service.prompts[0]

    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError):
            GenerationClient(service=ScriptedService([]), max_attempts=0)


# ── Response normalization ────────────────────────────────────────────────────

class TestNormalizeResponseText:

    def test_plain_string(self):
        assert normalize_response_text("abc") == "abc"

    def test_eager_text_attribute(self):
        assert normalize_response_text(SimpleNamespace(text="eager")) == "eager"

    def test_text_accessor(self):
        assert normalize_response_text(SimpleNamespace(text=lambda: "lazy")) == "lazy"

    def test_chat_completion_shape(self):
        completion = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content="from choices"))]
        )
        assert normalize_response_text(completion) == "from choices"

    def test_none(self):
        assert normalize_response_text(None) == ""

    def test_accessor_result_is_used_by_client(self, make_client, react_request):
        client, _ = make_client([SimpleNamespace(text=lambda: FENCED)])
        assert client.generate(react_request).raw_text == FENCED


# ── Classification ────────────────────────────────────────────────────────────

class TestClassifyFailure:

    def test_overload_marker_in_message(self):
        assert isinstance(classify_failure(OverloadError()), TransientServiceError)

    def test_status_code_attribute_wins(self):
        error = RuntimeError("Service temporarily unavailable")
        error.status_code = 503
        assert isinstance(classify_failure(error), TransientServiceError)

    def test_non_overload_status_code_is_fatal_even_with_marker_text(self):
        error = RuntimeError("rate limited, request id 5031")
        error.status_code = 429
        assert isinstance(classify_failure(error), FatalServiceError)

    def test_other_errors_are_fatal(self):
        classified = classify_failure(KeyError("missing"))
        assert isinstance(classified, FatalServiceError)
        assert isinstance(classified.cause, KeyError)
