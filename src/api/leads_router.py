"""
API endpoints for submitting leads to the CRM.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from src.api.dependencies import get_crm_client
from src.error_handler import ErrorHandler
from src.integrations.contracts.leads import LeadDeliveryClient, LeadErrorKind, LeadSubmissionError
from src.leads import build_lead, validate_contact_form
from src.quoting import Applicant, quote

logger = logging.getLogger(__name__)

api = APIRouter()
error_handler = ErrorHandler()

_STATUS_BY_KIND = {
    LeadErrorKind.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_ENTITY,
    LeadErrorKind.TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
}


class QuoteLeadRequest(BaseModel):
    applicant: Dict[str, Any] = Field(..., description="Quote inputs: product, age, coverage, years, health/smoker status")
    contact: Dict[str, Any] = Field(..., description="first_name, last_name, email, phone, zip")
    gender: Optional[str] = None


def _error_response(exc: LeadSubmissionError) -> JSONResponse:
    return JSONResponse(
        status_code=_STATUS_BY_KIND.get(exc.kind, status.HTTP_502_BAD_GATEWAY),
        content=error_handler.handle_submission_error(exc),
    )


async def _submit(client: LeadDeliveryClient, lead: Dict[str, Any]):
    try:
        result = await client.submit_lead(lead)
    except LeadSubmissionError as exc:
        return _error_response(exc)
    except Exception as exc:
        payload = error_handler.handle_exception(exc, context={"source": lead.get("source")})
        payload.pop("metadata", None)  # logged by ErrorHandler, kept out of the response
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)
    return result.to_dict()


@api.post("/leads", tags=["Leads"])
async def submit_lead(lead: Dict[str, Any] = Body(...), client: LeadDeliveryClient = Depends(get_crm_client)):
    return await _submit(client, lead)


@api.post("/leads/from-quote", tags=["Leads"])
async def submit_lead_from_quote(request: QuoteLeadRequest, client: LeadDeliveryClient = Depends(get_crm_client)):
    """Price the applicant, build the lead and deliver it in one call."""
    field_errors = validate_contact_form(request.contact)
    if field_errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"message": "Validation failed", "field_errors": field_errors},
        )

    applicant = Applicant.from_mapping(request.applicant)
    result = quote(applicant)
    if not result.eligible:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"message": "Applicant is not eligible for this product", "reason": result.reason},
        )

    lead = build_lead(applicant, request.contact, result.premium, gender=request.gender)
    return await _submit(client, lead)


@api.get("/leads/health", tags=["Leads"])
async def crm_health(client: LeadDeliveryClient = Depends(get_crm_client)):
    return {"crm_reachable": await client.health_check()}
