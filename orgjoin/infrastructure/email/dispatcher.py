from __future__ import annotations

import logging

from orgjoin.application.notifications.factory import NotificationPayload
from orgjoin.config.settings import Settings
from orgjoin.infrastructure.email.models import EmailService
from orgjoin.infrastructure.email.renderer.engine import EmailTemplateRenderer

logger = logging.getLogger(__name__)


async def deliver_notification(
    payload: NotificationPayload,
    *,
    email_service: EmailService,
    renderer: EmailTemplateRenderer,
    settings: Settings,
) -> None:
    """
    Render and send a membership update. Runs after the response is sent, so
    delivery failures are logged and never reach the caller.
    """
    try:
        rendered = renderer.render(
            template_key="membership_update",
            settings=settings,
            context={
                "subject": payload.subject,
                "header": payload.header,
                "message": payload.message,
            },
        )
        rendered.to = [payload.to]
        rendered.from_email = settings.email_from_address
        rendered.from_name = settings.email_from_name
        await email_service.send(rendered)
    except Exception as e:
        logger.error("Error delivering notification to %s: %s", payload.to, e, exc_info=True)
