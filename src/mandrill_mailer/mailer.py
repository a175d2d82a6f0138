# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Mailer that delivers :class:`~email.message.EmailMessage` via Mandrill.

Example::

    from email.message import EmailMessage
    from mandrill_mailer import MandrillMailer

    msg = EmailMessage()
    msg["From"] = "Shop <noreply@shop.example>"
    msg["To"] = "alice@example.com"
    msg["Subject"] = "Your order"
    msg["Tags"] = "orders,transactional"
    msg.set_content("Thanks for your order.")

    mailer = MandrillMailer("md-XXXXXXXX")
    mailer.send(msg)
"""

from __future__ import annotations

from email.message import EmailMessage
from typing import Any

from mandrill_mailer.attachments import AttachmentEncoder
from mandrill_mailer.config_loader import MandrillConfig
from mandrill_mailer.exceptions import MandrillValidationError
from mandrill_mailer.logger import get_logger
from mandrill_mailer.models import ProviderParams
from mandrill_mailer.transport import (
    DEFAULT_API_FORMAT,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    TransportClient,
)
from mandrill_mailer.translator import MessageTranslator


class MandrillMailer:
    """Send email messages through the Mandrill transactional API.

    The mailer keeps no state between calls besides its configuration, so
    one instance can be shared by several threads.

    Args:
        api_key: Mandrill API key.
        endpoint: API base URL (default: Mandrill production API).
        api_format: Response format (only "json" is supported by Mandrill).
        connect_timeout: Connection timeout in seconds.
        timeout: Response timeout in seconds.
        user_agent: User-Agent header sent with each request.
        async_sending: Ask Mandrill to process messages asynchronously.
    """

    def __init__(
        self,
        api_key: str,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        api_format: str = DEFAULT_API_FORMAT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        async_sending: bool = True,
    ):
        self.translator = MessageTranslator()
        self.encoder = AttachmentEncoder()
        self.transport = TransportClient(
            api_key,
            endpoint=endpoint,
            api_format=api_format,
            connect_timeout=connect_timeout,
            timeout=timeout,
            user_agent=user_agent,
            async_sending=async_sending,
        )
        self.logger = get_logger("MandrillMailer")

    @classmethod
    def from_config(cls, config: MandrillConfig) -> MandrillMailer:
        """Create a mailer from a loaded :class:`MandrillConfig`.

        Raises:
            MandrillValidationError: If the configuration has no API key.
        """
        if not config.api_key:
            raise MandrillValidationError("Mandrill API key is not configured")
        return cls(
            config.api_key,
            endpoint=config.endpoint,
            api_format=config.api_format,
            connect_timeout=config.connect_timeout,
            timeout=config.timeout,
            user_agent=config.user_agent,
            async_sending=config.async_sending,
        )

    def build_params(self, message: EmailMessage) -> ProviderParams:
        """Translate a message and its attachments, without sending it."""
        params = self.translator.translate(message)
        attachments = self.encoder.encode(message)
        if attachments:
            params.attachments = attachments
        images = self.encoder.encode_images(message)
        if images:
            params.images = images
        return params

    def send(self, message: EmailMessage) -> Any:
        """Send ``message`` and return the decoded Mandrill response.

        Raises:
            MandrillValidationError: The message cannot be translated; no
                request is made.
            MandrillDispatchError, MandrillParseError, MandrillApiError:
                The request failed or was rejected.
        """
        params = self.build_params(message)
        self.logger.debug(
            "Sending '%s' from %s to %d recipient(s)",
            params.subject, params.from_email, len(params.to),
        )
        result = self.transport.send(params)
        self.logger.info("Message '%s' accepted by Mandrill", params.subject)
        return result
