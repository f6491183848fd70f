"""Send-time checks against recorded bounces and complaints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ValidationError

from bouncewatch.api.deps import get_delivery_problems
from bouncewatch.core.problems import parse_email_address
from bouncewatch.services.delivery_problems import DeliveryProblems

router = APIRouter(prefix="/delivery-problems", tags=["delivery-problems"])


class CheckResponse(BaseModel):
    address: str
    status: str


@router.get("/{address}", response_model=CheckResponse)
def check_address(address: str, registry: DeliveryProblems = Depends(get_delivery_problems)) -> CheckResponse:
    """Return ok, or 429 if the address is over a bounce or complaint limit."""

    try:
        address = parse_email_address(address)
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid email address")

    if registry.limits.enabled:
        registry.check(address)
    return CheckResponse(address=address, status="ok")
