"""
FastAPI application - Main entry point

Run:
  uvicorn src.api.main:app --host 127.0.0.1 --port 8000
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.leads_router import api as leads_api
from src.api.quotes_router import api as quotes_api
from src.integrations.contracts.leads import LeadDeliveryClient
from src.utils.config_loader import load_crm_config, use_real_integrations

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================

def build_crm_client() -> LeadDeliveryClient:
    """Pick the real CRM client when an endpoint is configured, else the in-memory mock."""
    settings = load_crm_config()
    if use_real_integrations():
        from src.integrations.clients.real_http.crm import CRMClient

        logger.info("Lead delivery: real CRM at %s", settings.endpoint)
        return CRMClient(settings)

    from src.integrations.clients.mocks.crm import MockCRMClient

    logger.info("Lead delivery: mock CRM (set CRM_ENDPOINT to deliver for real)")
    return MockCRMClient(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.crm_client = build_crm_client()
    yield


# Initialize FastAPI app
app = FastAPI(
    title="Life Quote API",
    description="Life insurance premium quotes and CRM lead delivery",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(quotes_api, prefix="/api/v1")
app.include_router(leads_api, prefix="/api/v1")


# ============================================================================
# ENDPOINTS
# ============================================================================
@app.get("/", tags=["Health"])
async def root():
    return {"service": "Life Quote API", "status": "healthy", "version": "1.0.0", "timestamp": datetime.now().isoformat()}


@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}
