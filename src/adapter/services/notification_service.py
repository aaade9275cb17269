"""Notification Service Implementations

Provides concrete implementations for sending settlement alerts.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional
import httpx
from src.app.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


class LoggingNotificationService(NotificationService):
    """
    Notification service that logs alerts

    Always enabled; the log record is the alert of last resort.
    """

    async def send_settlement_alert(
        self,
        order_id: int,
        distributor_id: Optional[int],
        amount: Decimal,
        reason: str,
    ) -> bool:
        logger.error(
            f"[SETTLEMENT INCONSISTENCY] Order: {order_id}, "
            f"Distributor: {distributor_id}, "
            f"Credited: {amount}, "
            f"Reason: {reason}"
        )
        return True


class WebhookNotificationService(NotificationService):
    """
    Notification service that sends alerts via HTTP webhook

    Sends JSON payload to configured webhook URL.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        """
        Initialize webhook notification service

        Args:
            webhook_url: URL to POST alerts to
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def send_settlement_alert(
        self,
        order_id: int,
        distributor_id: Optional[int],
        amount: Decimal,
        reason: str,
    ) -> bool:
        """
        Send settlement alert via webhook

        Returns:
            True if webhook call succeeded, False otherwise
        """
        payload = {
            "type": "settlement_inconsistency",
            "order_id": order_id,
            "distributor_id": distributor_id,
            "amount": str(amount),
            "reason": reason,
            "detected_at": datetime.utcnow().isoformat(),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.webhook_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                logger.info(
                    f"Webhook notification sent for order {order_id} to {self.webhook_url}"
                )
                return True
        except httpx.HTTPError as e:
            logger.error(
                f"Failed to send webhook notification for order {order_id}: {e}"
            )
            return False


class CompositeNotificationService(NotificationService):
    """
    Notification service that delegates to multiple services

    Used to send to log + webhook.
    """

    def __init__(self, services: list[NotificationService]):
        self.services = services

    async def send_settlement_alert(
        self,
        order_id: int,
        distributor_id: Optional[int],
        amount: Decimal,
        reason: str,
    ) -> bool:
        """
        Send alert to all configured services

        Returns:
            True if at least one service succeeded, False otherwise
        """
        success = False
        for service in self.services:
            try:
                if await service.send_settlement_alert(order_id, distributor_id, amount, reason):
                    success = True
            except Exception as e:
                logger.error(f"Notification service {type(service).__name__} failed: {e}")
        return success


def create_notification_service(webhook_url: Optional[str] = None) -> NotificationService:
    """
    Factory function to create appropriate notification service

    Args:
        webhook_url: Optional webhook URL. If provided, creates composite
                     service with logging + webhook. Otherwise, just logging.

    Returns:
        Configured NotificationService
    """
    services: list[NotificationService] = [LoggingNotificationService()]

    if webhook_url:
        services.append(WebhookNotificationService(webhook_url))

    if len(services) == 1:
        return services[0]

    return CompositeNotificationService(services)
