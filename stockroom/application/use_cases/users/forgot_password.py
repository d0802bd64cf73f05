# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import html

from stockroom.application.services.reset_tokens import ResetTokenService
from stockroom.domain.users.entities import User, normalize_email
from stockroom.domain.users.exceptions import UserNotFoundError
from stockroom.domain.users.repositories import EmailSender, UserRepository
from stockroom.shared.errors import DeliveryError, ValidationError
from stockroom.shared.logging import logger

from ._policy import is_well_formed_email, require_fields

RESET_SUBJECT = "Password Reset Request"

_RESET_TEMPLATE = """
<div style="font-family: Arial, sans-serif; font-size: 16px; line-height: 1.6;">
  <h2>Hello {name}</h2>
  <p>Please use the URL below to reset your password:</p>
  <p>This link is valid for <strong>{minutes} minutes</strong>.</p>
  <a href="{url}" style="color: #2D89EF; text-decoration: none;">{url}</a>
  <p>Regards,</p>
  <p><strong>Inventory Management Team</strong></p>
</div>
"""


def build_reset_url(frontend_url: str, raw_token: str) -> str:
    return f"{frontend_url.rstrip('/')}/resetpassword/{raw_token}"


def render_reset_email(user: User, reset_url: str, minutes: int) -> str:
    return _RESET_TEMPLATE.format(
        name=html.escape(user.name),
        url=html.escape(reset_url, quote=True),
        minutes=minutes,
    )


class ForgotPasswordUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        reset_tokens: ResetTokenService,
        email_sender: EmailSender,
        frontend_url: str,
        sender_address: str,
    ) -> None:
        self._users = users
        self._reset_tokens = reset_tokens
        self._email_sender = email_sender
        self._frontend_url = frontend_url
        self._sender_address = sender_address

    def execute(self, email: str | None) -> None:
        (email,) = require_fields("Please add an email", email)

        user = self._users.find_by_email(normalize_email(email))
        if user is None:
            raise UserNotFoundError("User does not exist")

        send_to = user.email.strip()
        if not is_well_formed_email(send_to):
            raise ValidationError("Invalid recipient email address")

        raw_token = self._reset_tokens.issue_for(user.id)
        minutes = int(self._reset_tokens.ttl.total_seconds() // 60)
        body = render_reset_email(user, build_reset_url(self._frontend_url, raw_token), minutes)

        try:
            self._email_sender.send(
                self._sender_address,
                send_to,
                self._sender_address,
                RESET_SUBJECT,
                body,
            )
        except DeliveryError:
            logger.error(f"users.forgot_password: delivery failed (user_id={user.id})")
            raise
        except Exception as exc:
            logger.exception(f"users.forgot_password: delivery failed (user_id={user.id})")
            raise DeliveryError() from exc
        logger.info(f"users.forgot_password: reset email sent (user_id={user.id})")
