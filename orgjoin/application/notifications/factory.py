from __future__ import annotations

from dataclasses import dataclass

from orgjoin.domain.value_objects.request_status import RequestStatus

PRODUCT_NAME = "PhotoComp"


@dataclass(slots=True, frozen=True)
class NotificationPayload:
    to: str
    subject: str
    header: str
    message: str


def build_notification_payload(
    kind: RequestStatus,
    organization_id: str,
    recipient_email: str,
    *,
    product_name: str = PRODUCT_NAME,
) -> NotificationPayload:
    """
    Build the message sent to an applicant once their request is resolved.
    Keep strings easy to find and translate.
    """
    subject = f"An update from {product_name}!"
    if kind is RequestStatus.APPROVED:
        header = f"Your membership application for {organization_id} has been approved!"
        message = (
            f"You will now get updates about {organization_id}. "
            "Know more by checking out the website!"
        )
    elif kind is RequestStatus.DENIED:
        header = f"Your membership application for {organization_id} has been denied!"
        message = (
            f"Please contact {organization_id}'s admin for more info. "
            "In the meantime... You can check other organizations to apply to."
        )
    else:
        raise ValueError(f"No notification for unresolved status: {kind.value}")
    return NotificationPayload(to=recipient_email, subject=subject, header=header, message=message)
