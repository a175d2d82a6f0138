# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Attachment encoding for Mandrill messages.

Mandrill expects each attachment as ``{"type", "name", "content"}`` where
``content`` is the base64 encoding of the file bytes as one continuous
string. The encoder decodes each MIME part to its raw bytes and applies
the base64 transfer encoding itself, independent of the transfer encoding
the part happens to use inside the local message.

Parts are split in two groups:

- attachments: non-body parts returned by ``iter_attachments()`` with an
  ``attachment`` disposition; inline and embedded parts are skipped;
- images: inline ``image/*`` parts with a Content-ID, sent through
  Mandrill's ``images`` field so that ``cid:`` references keep working.
"""

from __future__ import annotations

import base64
import re
from email.message import EmailMessage

from mandrill_mailer.exceptions import MandrillValidationError
from mandrill_mailer.logger import get_logger
from mandrill_mailer.models import AttachmentParams

FILENAME_PATTERN = re.compile(r'filename="([A-Za-z0-9 ._-]+)"')


def encode_content(payload: bytes) -> str:
    """Apply the base64 transfer encoding, without line breaks."""
    return base64.b64encode(payload).decode("ascii")


def extract_filename(content_disposition: str | None) -> str | None:
    """Return the quoted filename of a Content-Disposition value, if any."""
    if not content_disposition:
        return None
    match = FILENAME_PATTERN.search(content_disposition)
    return match.group(1) if match else None


def is_inline_image(part: EmailMessage) -> bool:
    """Check if a part is an inline image referenced by Content-ID."""
    return (
        part.get_content_maintype() == "image"
        and part.get_content_disposition() != "attachment"
        and part["Content-ID"] is not None
    )


class AttachmentEncoder:
    """Build Mandrill attachment and image entries from a message."""

    def __init__(self) -> None:
        self.logger = get_logger("AttachmentEncoder")

    def encode(self, message: EmailMessage) -> list[AttachmentParams]:
        """Encode the attached parts of ``message`` in order.

        Raises:
            MandrillValidationError: If a part has no usable filename.
        """
        attachments = []
        for part in message.iter_attachments():
            if part.get_content_disposition() != "attachment":
                continue
            disposition = part["Content-Disposition"]
            name = extract_filename(str(disposition) if disposition is not None else None)
            if name is None:
                raise MandrillValidationError(
                    f"Attachment of type {part.get_content_type()} has no valid filename "
                    f"(Content-Disposition: {disposition})"
                )
            attachments.append(self._encode_part(part, name))
        return attachments

    def encode_images(self, message: EmailMessage) -> list[AttachmentParams]:
        """Encode the inline images of ``message``, named by Content-ID."""
        images = []
        for part in message.walk():
            if part is message or part.is_multipart() or not is_inline_image(part):
                continue
            content_id = str(part["Content-ID"]).strip().strip("<>")
            if not content_id:
                raise MandrillValidationError("Inline image has an empty Content-ID")
            images.append(self._encode_part(part, content_id))
        return images

    def _encode_part(self, part: EmailMessage, name: str) -> AttachmentParams:
        payload = part.get_payload(decode=True) or b""
        self.logger.debug("Encoding %s (%s, %d bytes)", name, part.get_content_type(), len(payload))
        return AttachmentParams(
            type=part.get_content_type(),
            name=name,
            content=encode_content(payload),
        )
