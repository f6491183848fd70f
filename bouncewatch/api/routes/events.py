"""Inbound webhook handlers for SES/SNS notifications."""
from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from bouncewatch.api.deps import get_delivery_problems
from bouncewatch.services.delivery_problems import DeliveryProblems
from bouncewatch.services.notification import BounceSubtype, BounceType, ComplaintFeedbackType
from bouncewatch.utils.logger import logger

router = APIRouter(prefix="/events", tags=["events"])


def _recipients(section: dict[str, Any], key: str) -> list[str]:
    recipients = section.get(key) or []
    return [
        recipient["emailAddress"]
        for recipient in recipients
        if isinstance(recipient, dict) and recipient.get("emailAddress")
    ]


@router.post("/sns")
def handle_sns_notification(
    payload: dict,
    registry: DeliveryProblems = Depends(get_delivery_problems),
) -> dict[str, Any]:
    """Record SES bounces and complaints delivered through SNS."""

    message_type = payload.get("Type")
    if message_type == "SubscriptionConfirmation":
        return {"status": "confirmed", "recorded": 0}
    if message_type != "Notification":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unsupported SNS message type")

    message_body = payload.get("Message")
    if not message_body:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing SNS Message body")

    try:
        message = json.loads(message_body)
    except json.JSONDecodeError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid SNS Message JSON")
    if not isinstance(message, dict):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid SNS Message JSON")

    notification_type = (message.get("notificationType") or "").lower()
    if notification_type == "bounce":
        bounce = message.get("bounce") or {}
        bounce_type = BounceType.parse(bounce.get("bounceType"))
        bounce_subtype = BounceSubtype.parse(bounce.get("bounceSubType"))
        addresses = _recipients(bounce, "bouncedRecipients")
        for address in addresses:
            registry.record_bounce(address, bounce_type, bounce_subtype)
        return {"status": "bounced", "recorded": len(addresses)}

    if notification_type == "complaint":
        complaint = message.get("complaint") or {}
        complaint_type = ComplaintFeedbackType.parse(complaint.get("complaintFeedbackType"))
        addresses = _recipients(complaint, "complainedRecipients")
        for address in addresses:
            registry.record_complaint(address, complaint_type)
        return {"status": "complaint", "recorded": len(addresses)}

    logger.debug("Ignoring SES notification of type %r", notification_type)
    return {"status": "ignored", "recorded": 0}
