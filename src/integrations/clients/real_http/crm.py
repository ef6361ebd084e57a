"""
Real CRM HTTP Client.

Purpose:
- Delivers accepted quotes (leads) to the CRM lead endpoint
- Validates and sanitizes every lead before it leaves the service
- Retries transient failures with exponential backoff

Implementation notes:
- Use httpx for async requests
- Each attempt is bounded by the configured timeout and cancelled when it overruns
- Failures are classified into LeadErrorKind so callers never parse provider errors

Important:
- Keep this client as the ONLY place where CRM HTTP calls are made.
- Settings are read-only after construction, so one instance can serve
  concurrent submissions.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

import httpx

from src.integrations.contracts.leads import (
    DeliveryState,
    LeadDeliveryClient,
    LeadErrorKind,
    LeadSubmissionError,
    SubmissionResult,
    classify_status,
)
from src.leads.sanitizer import sanitize_lead
from src.leads.validation import validate_lead
from src.utils.config_loader import CRMSettings

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


def redact_email(email: Any) -> str:
    """Keep the first character and the domain, e.g. ``j***@example.com``."""
    value = str(email or "")
    local, sep, domain = value.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


class CRMClient(LeadDeliveryClient):
    def __init__(
        self,
        settings: Optional[CRMSettings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self.settings = settings or CRMSettings()
        self._transport = transport
        self._sleep = sleep

    def retry_delay_for(self, attempt: int) -> float:
        """Backoff before the attempt following ``attempt`` (1-based)."""
        return self.settings.retry_delay_seconds * (2 ** (attempt - 1))

    async def submit_lead(self, lead: Mapping[str, Any]) -> SubmissionResult:
        logger.debug("Lead delivery state=%s", DeliveryState.VALIDATING.value)
        validation = validate_lead(lead)
        if not validation.is_valid:
            error = LeadSubmissionError(
                LeadErrorKind.VALIDATION_ERROR,
                "Lead validation failed: " + ", ".join(validation.errors),
                details=validation.errors,
            )
            logger.error(
                "Lead validation failed: email=%s errors=%s",
                redact_email(lead.get("email")),
                validation.errors,
            )
            raise error

        logger.debug("Lead delivery state=%s", DeliveryState.SANITIZING.value)
        sanitized = sanitize_lead(lead)

        logger.info("Submitting lead to CRM: email=%s", redact_email(sanitized.get("email")))
        return await self._submit_with_retry(sanitized)

    async def _submit_with_retry(self, lead: Dict[str, Any]) -> SubmissionResult:
        total = self.settings.retry_attempts
        email = redact_email(lead.get("email"))

        for attempt in range(1, total + 1):
            logger.info(
                "Lead delivery state=%s attempt=%s/%s email=%s",
                DeliveryState.SENDING.value,
                attempt,
                total,
                email,
            )
            try:
                data = await self._attempt(lead)
            except LeadSubmissionError as exc:
                exc.attempts = attempt
                if exc.retryable and attempt < total:
                    delay = self.retry_delay_for(attempt)
                    logger.warning(
                        "Lead delivery state=%s attempt=%s/%s delay=%.2fs email=%s kind=%s: %s",
                        DeliveryState.RETRYING.value,
                        attempt,
                        total,
                        delay,
                        email,
                        exc.kind.value,
                        exc.message,
                    )
                    await self._sleep(delay)
                    continue

                logger.error(
                    "Lead delivery state=%s email=%s attempts=%s kind=%s status=%s: %s",
                    DeliveryState.FAILED.value,
                    email,
                    attempt,
                    exc.kind.value,
                    exc.status_code,
                    exc.message,
                )
                raise

            logger.info(
                "Lead delivery state=%s email=%s attempts=%s lead_id=%s",
                DeliveryState.SUCCESS.value,
                email,
                attempt,
                data.get("leadId") or data.get("lead_id"),
            )
            return SubmissionResult.succeeded(data, attempt)

        # retry_attempts is validated to be >= 1, so the loop always returns or raises
        raise LeadSubmissionError(LeadErrorKind.UNKNOWN, "No delivery attempt was made", attempts=0)

    async def _attempt(self, lead: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return await asyncio.wait_for(self._post_lead(lead), timeout=self.settings.timeout_seconds)
        except asyncio.TimeoutError as exc:
            raise LeadSubmissionError(LeadErrorKind.TIMEOUT, "CRM request timeout") from exc
        except LeadSubmissionError:
            raise
        except Exception as exc:
            raise LeadSubmissionError(LeadErrorKind.UNKNOWN, f"Unexpected CRM client error: {exc}") from exc

    def _build_headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {
            "Content-Type": "application/json",
            "User-Agent": self.settings.user_agent,
        }
        if self.settings.api_key:
            headers["Authorization"] = f"Bearer {self.settings.api_key}"
        return headers

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.settings.timeout_seconds, transport=self._transport)

    async def _post_lead(self, lead: Dict[str, Any]) -> Dict[str, Any]:
        """Single POST to the CRM. Raises LeadSubmissionError for any non-success outcome."""
        try:
            async with self._http_client() as client:
                response = await client.post(self.settings.endpoint, json=lead, headers=self._build_headers())
        except httpx.TimeoutException as exc:
            raise LeadSubmissionError(LeadErrorKind.TIMEOUT, "CRM request timeout") from exc
        except httpx.TransportError as exc:
            raise LeadSubmissionError(LeadErrorKind.TRANSPORT_ERROR, f"CRM transport error: {exc}") from exc

        if not response.is_success:
            body = response.text
            raise LeadSubmissionError(
                classify_status(response.status_code),
                f"CRM API returned {response.status_code}: {body or response.reason_phrase}",
                status_code=response.status_code,
                response_body=body,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise LeadSubmissionError(
                LeadErrorKind.UNKNOWN,
                "CRM returned a response that is not valid JSON",
                status_code=response.status_code,
                response_body=response.text,
            ) from exc
        return data if isinstance(data, dict) else {"data": data}

    async def health_check(self) -> bool:
        try:
            async with self._http_client() as client:
                response = await client.options(
                    self.settings.endpoint, headers={"User-Agent": self.settings.user_agent}
                )
            return response.is_success
        except httpx.HTTPError as exc:
            logger.warning("CRM health check failed: %s", exc)
            return False
