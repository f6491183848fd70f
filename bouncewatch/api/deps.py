"""FastAPI dependencies shared by the routers."""
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from bouncewatch.core.config import settings
from bouncewatch.db.session import get_db
from bouncewatch.db.store import SqlDeliveryProblemStore
from bouncewatch.services.delivery_problems import DeliveryProblems


def get_delivery_problems(db: Session = Depends(get_db)) -> DeliveryProblems:
    """Registry bound to the request's database session."""

    return DeliveryProblems.from_settings(settings, SqlDeliveryProblemStore(db))
