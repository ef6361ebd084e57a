from fastapi import HTTPException, Request, status

from src.integrations.contracts.leads import LeadDeliveryClient


def get_crm_client(request: Request) -> LeadDeliveryClient:
    """CRM client built once at startup and stored on the app state."""
    client = getattr(request.app.state, "crm_client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Lead delivery is not configured",
        )
    return client
