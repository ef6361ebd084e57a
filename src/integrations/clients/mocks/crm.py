"""Mock CRM client that keeps delivered leads in memory.

Used when no CRM endpoint is configured. It goes through the same validation,
sanitization and retry path as the real client; only the network call is faked.
Scripted failures can be queued to exercise retry handling end-to-end.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from uuid import uuid4

from src.integrations.clients.real_http.crm import CRMClient, SleepFn
from src.integrations.contracts.leads import LeadSubmissionError
from src.utils.config_loader import CRMSettings

logger = logging.getLogger(__name__)


class MockCRMClient(CRMClient):
    """
    In-memory stand-in for the CRM lead endpoint.

    Scripted failures form one queue per instance, consumed by whichever attempt
    reaches the network call next, so concurrent ``submit_lead`` calls share it.
    ``delivered`` keeps every accepted lead for the lifetime of the instance; use
    a fresh client per test or call ``reset()``.
    """

    def __init__(
        self,
        settings: Optional[CRMSettings] = None,
        *,
        failures: Optional[Iterable[LeadSubmissionError]] = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        super().__init__(settings or CRMSettings(endpoint="mock://crm/leads"), sleep=sleep)
        self.delivered: List[Dict[str, Any]] = []
        self.calls = 0
        self._failures: List[LeadSubmissionError] = list(failures or [])

    def reset(self) -> None:
        self.delivered.clear()
        self.calls = 0
        self._failures.clear()

    async def _post_lead(self, lead: Dict[str, Any]) -> Dict[str, Any]:
        self.calls += 1
        if self._failures:
            raise self._failures.pop(0)

        lead_id = f"mock-lead-{uuid4().hex[:12]}"
        self.delivered.append(dict(lead))
        logger.info("Mock CRM stored lead %s", lead_id)
        return {
            "leadId": lead_id,
            "status": "RECEIVED",
            "received_at": datetime.now(timezone.utc).isoformat(),
        }

    async def health_check(self) -> bool:
        return True
