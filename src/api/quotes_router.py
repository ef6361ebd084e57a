"""
API endpoints for premium quotes.
"""

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from src.quoting import Applicant, format_coverage, list_products, quote

api = APIRouter()


class QuoteRequest(BaseModel):
    product: str = Field(..., description="TERM_LIFE, WHOLE_LIFE or FINAL_EXPENSE")
    age: Optional[int] = None
    coverage: Optional[float] = Field(default=None, description="Requested coverage in dollars")
    years: Optional[int] = Field(default=None, description="Term length, used for term life only")
    health_status: Optional[str] = Field(default=None, description="Excellent, Good, Average or Below Average")
    smoker_status: Optional[str] = Field(default=None, description="Smoker / Non-smoker (or Yes / No)")


@api.get("/products", tags=["Quotes"])
async def get_products():
    return {"products": list_products()}


@api.post("/quotes", tags=["Quotes"])
async def create_quote(request: QuoteRequest):
    applicant = Applicant.from_mapping(request.model_dump())
    result = quote(applicant)
    return {
        "product": request.product,
        "coverage_label": format_coverage(applicant.coverage) if applicant.coverage else None,
        **result.to_dict(),
    }
