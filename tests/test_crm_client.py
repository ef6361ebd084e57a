"""Tests for the real CRM HTTP client, using httpx.MockTransport in place of the network."""

import asyncio
import json

import httpx
import pytest

from src.integrations.clients.real_http.crm import CRMClient, redact_email
from src.integrations.contracts.leads import LeadErrorKind, LeadSubmissionError
from src.utils.config_loader import CRMSettings


class ScriptedCRM:
    """Replays a fixed sequence of responses (or exceptions) and records every request."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _client(crm_settings, handler, sleep, **overrides):
    settings = crm_settings.model_copy(update=overrides) if overrides else crm_settings
    return CRMClient(settings, transport=httpx.MockTransport(handler), sleep=sleep)


@pytest.mark.asyncio
async def test_successful_submission_sends_sanitized_json(crm_settings, sleep, valid_lead):
    crm = ScriptedCRM(httpx.Response(201, json={"leadId": "L-100"}))
    client = _client(crm_settings, crm, sleep)
    valid_lead["first_name"] = "  <Jane> "

    result = await client.submit_lead(valid_lead)

    assert result.success is True
    assert result.data == {"leadId": "L-100"}
    assert result.attempts == 1
    assert sleep.delays == []

    request = crm.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://crm.example.test/api/leads"
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["User-Agent"] == "HealthcareAmericanQuoteTool/1.0"
    assert request.headers["Authorization"] == "Bearer secret-token"
    body = json.loads(request.content)
    assert body["first_name"] == "Jane"
    assert body["email"] == "jane.doe@example.com"


@pytest.mark.asyncio
async def test_no_authorization_header_without_api_key(crm_settings, sleep, valid_lead):
    crm = ScriptedCRM(httpx.Response(200, json={"leadId": "L-1"}))
    client = _client(crm_settings, crm, sleep, api_key=None)

    await client.submit_lead(valid_lead)

    assert "Authorization" not in crm.requests[0].headers


@pytest.mark.asyncio
async def test_server_errors_retry_until_attempts_exhausted(crm_settings, sleep, valid_lead):
    crm = ScriptedCRM(httpx.Response(500, text="boom"))
    client = _client(crm_settings, crm, sleep)

    with pytest.raises(LeadSubmissionError) as excinfo:
        await client.submit_lead(valid_lead)

    error = excinfo.value
    assert error.kind is LeadErrorKind.SERVER_ERROR
    assert error.status_code == 500
    assert error.response_body == "boom"
    assert error.attempts == 3
    assert len(crm.requests) == 3
    assert sleep.delays == [0.5, 1.0]


@pytest.mark.asyncio
async def test_recovers_after_transient_server_errors(crm_settings, sleep, valid_lead):
    crm = ScriptedCRM(
        httpx.Response(503, text="unavailable"),
        httpx.Response(502, text="bad gateway"),
        httpx.Response(200, json={"leadId": "L-7"}),
    )
    client = _client(crm_settings, crm, sleep)

    result = await client.submit_lead(valid_lead)

    assert result.success is True
    assert result.attempts == 3
    assert len(crm.requests) == 3


@pytest.mark.asyncio
async def test_attempts_never_exceed_configuration(crm_settings, sleep, valid_lead):
    crm = ScriptedCRM(httpx.Response(500, text="boom"))
    client = _client(crm_settings, crm, sleep, retry_attempts=5)

    with pytest.raises(LeadSubmissionError):
        await client.submit_lead(valid_lead)

    assert len(crm.requests) == 5
    assert sleep.delays == [0.5, 1.0, 2.0, 4.0]


@pytest.mark.asyncio
async def test_client_error_is_not_retried(crm_settings, sleep, valid_lead):
    crm = ScriptedCRM(httpx.Response(400, text="bad lead"))
    client = _client(crm_settings, crm, sleep)

    with pytest.raises(LeadSubmissionError) as excinfo:
        await client.submit_lead(valid_lead)

    assert excinfo.value.kind is LeadErrorKind.CLIENT_ERROR
    assert excinfo.value.attempts == 1
    assert len(crm.requests) == 1
    assert sleep.delays == []


@pytest.mark.asyncio
async def test_rate_limit_is_retried(crm_settings, sleep, valid_lead):
    crm = ScriptedCRM(
        httpx.Response(429, text="slow down"),
        httpx.Response(200, json={"leadId": "L-2"}),
    )
    client = _client(crm_settings, crm, sleep)

    result = await client.submit_lead(valid_lead)

    assert result.attempts == 2
    assert sleep.delays == [0.5]


@pytest.mark.asyncio
async def test_connection_failures_are_transport_errors(crm_settings, sleep, valid_lead):
    crm = ScriptedCRM(httpx.ConnectError("connection refused"))
    client = _client(crm_settings, crm, sleep)

    with pytest.raises(LeadSubmissionError) as excinfo:
        await client.submit_lead(valid_lead)

    assert excinfo.value.kind is LeadErrorKind.TRANSPORT_ERROR
    assert excinfo.value.retryable is True
    assert len(crm.requests) == 3


@pytest.mark.asyncio
async def test_httpx_timeout_is_classified_as_timeout(crm_settings, sleep, valid_lead):
    crm = ScriptedCRM(httpx.ReadTimeout("read timed out"), httpx.Response(200, json={"leadId": "L-3"}))
    client = _client(crm_settings, crm, sleep)

    result = await client.submit_lead(valid_lead)

    assert result.attempts == 2
    assert sleep.delays == [0.5]


@pytest.mark.asyncio
async def test_slow_attempt_is_cancelled_and_retried(crm_settings, sleep, valid_lead):
    calls = []

    async def slow_handler(request):
        calls.append(request)
        await asyncio.sleep(5)
        return httpx.Response(200, json={"leadId": "never"})

    client = _client(crm_settings, slow_handler, sleep, timeout_seconds=0.05, retry_attempts=2)

    with pytest.raises(LeadSubmissionError) as excinfo:
        await client.submit_lead(valid_lead)

    assert excinfo.value.kind is LeadErrorKind.TIMEOUT
    assert excinfo.value.attempts == 2
    assert len(calls) == 2
    assert sleep.delays == [0.5]


@pytest.mark.asyncio
async def test_invalid_lead_never_reaches_network(crm_settings, sleep, valid_lead):
    crm = ScriptedCRM(httpx.Response(200, json={}))
    client = _client(crm_settings, crm, sleep)
    del valid_lead["email"]

    with pytest.raises(LeadSubmissionError) as excinfo:
        await client.submit_lead(valid_lead)

    assert excinfo.value.kind is LeadErrorKind.VALIDATION_ERROR
    assert "Missing required field: email" in excinfo.value.details
    assert excinfo.value.attempts == 0
    assert crm.requests == []


@pytest.mark.asyncio
async def test_non_json_success_body_is_unknown_and_terminal(crm_settings, sleep, valid_lead):
    crm = ScriptedCRM(httpx.Response(200, text="<html>ok</html>"))
    client = _client(crm_settings, crm, sleep)

    with pytest.raises(LeadSubmissionError) as excinfo:
        await client.submit_lead(valid_lead)

    assert excinfo.value.kind is LeadErrorKind.UNKNOWN
    assert len(crm.requests) == 1


@pytest.mark.asyncio
async def test_empty_success_body_is_unknown_and_terminal(crm_settings, sleep, valid_lead):
    crm = ScriptedCRM(httpx.Response(200))
    client = _client(crm_settings, crm, sleep)

    with pytest.raises(LeadSubmissionError) as excinfo:
        await client.submit_lead(valid_lead)

    assert excinfo.value.kind is LeadErrorKind.UNKNOWN
    assert excinfo.value.retryable is False
    assert len(crm.requests) == 1


@pytest.mark.asyncio
async def test_concurrent_submissions_are_independent(crm_settings, sleep, valid_lead):
    crm = ScriptedCRM(httpx.Response(200, json={"leadId": "L-x"}))
    client = _client(crm_settings, crm, sleep)
    other = dict(valid_lead, email="sam.lee@example.com")

    results = await asyncio.gather(client.submit_lead(valid_lead), client.submit_lead(other))

    assert all(r.success for r in results)
    sent = sorted(json.loads(r.content)["email"] for r in crm.requests)
    assert sent == ["jane.doe@example.com", "sam.lee@example.com"]


@pytest.mark.asyncio
async def test_health_check(crm_settings, sleep):
    crm = ScriptedCRM(httpx.Response(204))
    assert await _client(crm_settings, crm, sleep).health_check() is True
    assert crm.requests[0].method == "OPTIONS"

    down = ScriptedCRM(httpx.ConnectError("down"))
    assert await _client(crm_settings, down, sleep).health_check() is False


def test_backoff_schedule(crm_settings):
    client = CRMClient(crm_settings)
    assert [client.retry_delay_for(n) for n in (1, 2, 3)] == [0.5, 1.0, 2.0]


def test_redact_email():
    assert redact_email("jane.doe@example.com") == "j***@example.com"
    assert redact_email("not-an-email") == "***"
    assert redact_email(None) == "***"


def test_default_settings():
    settings = CRMSettings()
    assert settings.timeout_seconds == 10.0
    assert settings.retry_attempts == 3
    assert settings.retry_delay_seconds == 1.0
