from __future__ import annotations

import logging

from orgjoin.application.notifications.factory import build_notification_payload
from orgjoin.config.settings import Settings
from orgjoin.domain.value_objects.request_status import RequestStatus
from orgjoin.infrastructure.email.dispatcher import deliver_notification
from orgjoin.infrastructure.email.models import EmailMessage, EmailService
from orgjoin.infrastructure.email.renderer.engine import EmailTemplateRenderer


class StubEmailService(EmailService):
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> None:
        if self.fail:
            raise ConnectionError("smtp down")
        self.sent.append(message)


def _settings() -> Settings:
    return Settings.model_validate(
        {
            "database_url": "sqlite+aiosqlite:///unused.db",
            "jwt_secret_key": "unit-secret",
            "product_name": "Acme Hub",
            "email_from_name": "Acme Hub",
            "email_from_address": "hub@acme.test",
        }
    )


async def test_delivers_rendered_email():
    service = StubEmailService()
    payload = build_notification_payload(
        RequestStatus.DENIED, "acme", "u2@example.com", product_name="Acme Hub"
    )

    await deliver_notification(
        payload,
        email_service=service,
        renderer=EmailTemplateRenderer.create_default(),
        settings=_settings(),
    )

    [message] = service.sent
    assert list(message.to) == ["u2@example.com"]
    assert message.subject == "An update from Acme Hub!"
    assert message.from_email == "hub@acme.test"
    assert "Your membership application for acme has been denied!" in message.text
    assert "acme&#39;s admin" in message.html


async def test_send_failure_is_logged_not_raised(caplog):
    payload = build_notification_payload(RequestStatus.APPROVED, "acme", "u1@example.com")

    with caplog.at_level(logging.ERROR):
        await deliver_notification(
            payload,
            email_service=StubEmailService(fail=True),
            renderer=EmailTemplateRenderer.create_default(),
            settings=_settings(),
        )

    assert "u1@example.com" in caplog.text
