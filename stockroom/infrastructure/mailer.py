# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Outbound e-mail over SMTP."""

from __future__ import annotations

import smtplib
import ssl
from email.message import EmailMessage

from stockroom.domain.users.repositories import EmailSender
from stockroom.shared.config.settings import EmailConfig
from stockroom.shared.errors import DeliveryError
from stockroom.shared.logging import logger


class SmtpEmailSender(EmailSender):
    """Sends HTML mail through an SMTP-over-SSL relay.

    Failures are reported once as ``DeliveryError``; retrying is left to the
    caller.
    """

    def __init__(self, config: EmailConfig) -> None:
        self._config = config

    def _build_message(
        self, sent_from: str, send_to: str, reply_to: str, subject: str, html_body: str
    ) -> EmailMessage:
        message = EmailMessage()
        message["From"] = sent_from
        message["To"] = send_to
        message["Reply-To"] = reply_to
        message["Subject"] = subject
        message.set_content(html_body, subtype="html")
        return message

    def send(
        self,
        sent_from: str,
        send_to: str,
        reply_to: str,
        subject: str,
        html_body: str,
    ) -> None:
        message = self._build_message(sent_from, send_to, reply_to, subject, html_body)
        try:
            with smtplib.SMTP_SSL(
                self._config.host,
                self._config.port,
                timeout=self._config.timeout,
                context=ssl.create_default_context(),
            ) as server:
                if self._config.user and self._config.password:
                    server.login(self._config.user, self._config.password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(
                f"email.send: failed (host={self._config.host}, error={type(exc).__name__})"
            )
            raise DeliveryError() from exc
        logger.info(f"email.send: ok (to={send_to}, subject={subject!r})")


__all__ = ["SmtpEmailSender"]
