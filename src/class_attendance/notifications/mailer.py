from __future__ import annotations

from typing import Optional, Protocol

from flask_mail import Mail, Message

from .model import NotificationRequest


class Mailer(Protocol):
    def send(self, request: NotificationRequest) -> None:
        raise NotImplementedError


class FlaskMailMailer:
    """Deliver notifications through Flask-Mail (needs an app context)."""

    def __init__(self, mail: Mail, *, sender: Optional[str] = None):
        self._mail = mail
        self._sender = sender

    def send(self, request: NotificationRequest) -> None:
        message = Message(
            subject=request.subject,
            recipients=[request.recipient_address],
            body=request.body,
            sender=self._sender,
        )
        self._mail.send(message)
