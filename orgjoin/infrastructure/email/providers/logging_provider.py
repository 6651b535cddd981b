from __future__ import annotations

import logging

from orgjoin.infrastructure.email.models import EmailMessage, EmailService

logger = logging.getLogger(__name__)


class LoggingEmailService(EmailService):
    async def send(self, message: EmailMessage) -> None:
        logger.info(
            "Sending email (logging provider): subject=%s "
            "to=%s from=%s <%s> text_len=%s html_len=%s",
            message.subject,
            ",".join(message.to),
            message.from_name or "",
            message.from_email or "",
            len(message.text or ""),
            len(message.html or ""),
        )
