# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Translation of email messages into Mandrill message parameters."""

from __future__ import annotations

from email.message import EmailMessage
from email.utils import getaddresses

from mandrill_mailer.exceptions import MandrillValidationError
from mandrill_mailer.message import MandrillMessage
from mandrill_mailer.models import ProviderParams, Recipient, RecipientType

# Headers carried by dedicated fields of the Mandrill message
RESERVED_HEADERS = frozenset({"Date", "Subject", "MIME-Version", "Cc", "Bcc", "To"})

# MIME structure of the local message tree, not part of the message itself
STRUCTURE_HEADERS = frozenset({"Content-Type", "Content-Transfer-Encoding", "Content-Disposition"})

TAGS_HEADER = "Tags"

RECIPIENT_HEADERS: tuple[tuple[str, RecipientType], ...] = (
    ("To", "to"),
    ("Cc", "cc"),
    ("Bcc", "bcc"),
)


def _addresses(message: EmailMessage, header: str) -> list[tuple[str, str]]:
    """Return (display name, email) pairs of a header, skipping empty entries."""
    values = [str(value) for value in message.get_all(header, [])]
    return [(name, email) for name, email in getaddresses(values) if email]


def _body(message: EmailMessage, subtype: str) -> str | None:
    part = message.get_body(preferencelist=(subtype,))
    if part is None or not part.get_payload():
        return None
    return part.get_content()


def parse_recipients(message: EmailMessage, header: str, role: RecipientType) -> list[Recipient]:
    """Build recipients for one role from the given address header.

    Order is preserved and duplicates are passed through unchanged. The
    name is only set when the address has a non-empty display name.
    """
    return [
        Recipient(email=email, name=name or None, type=role)
        for name, email in _addresses(message, header)
    ]


def parse_tags(value: str) -> list[str]:
    """Split a comma separated Tags header value."""
    return [tag.strip() for tag in value.split(",") if tag.strip()]


class MessageTranslator:
    """Convert an :class:`EmailMessage` into :class:`ProviderParams`.

    A :class:`MandrillMessage` already knows its parameters and is passed
    through as a copy; every other message goes through the generic
    mapping. Attachments are not handled here (see
    :class:`mandrill_mailer.attachments.AttachmentEncoder`).
    """

    def translate(self, message: EmailMessage) -> ProviderParams:
        if isinstance(message, MandrillMessage):
            return message.mandrill_params.model_copy(deep=True)
        return self.translate_generic(message)

    def translate_generic(self, message: EmailMessage) -> ProviderParams:
        """Map subject, bodies, sender, recipients and headers.

        Raises:
            MandrillValidationError: If the message has no From address.
        """
        senders = _addresses(message, "From")
        if not senders:
            raise MandrillValidationError("Please specify From parameter!")
        from_name, from_email = senders[0]

        recipients: list[Recipient] = []
        for header, role in RECIPIENT_HEADERS:
            recipients.extend(parse_recipients(message, header, role))

        subject = message["Subject"]
        params = ProviderParams(
            subject=str(subject) if subject is not None else None,
            text=_body(message, "plain"),
            html=_body(message, "html"),
            from_email=from_email,
            from_name=from_name or None,
            to=recipients,
        )

        for name, value in message.items():
            if name in RESERVED_HEADERS or name in STRUCTURE_HEADERS:
                continue
            if name == TAGS_HEADER:
                params.tags = parse_tags(str(value))
            else:
                params.headers[name] = str(value)
        return params
