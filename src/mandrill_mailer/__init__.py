# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Send Python email messages through the Mandrill transactional API.

Features:
    - Translation of ``email.message.EmailMessage`` into Mandrill parameters
      (sender, to/cc/bcc recipients, extra headers, tags, bodies)
    - Pre-built parameters via ``MandrillMessage`` for Mandrill options
    - Attachments and inline images encoded as base64
    - Synchronous HTTP dispatch with explicit error types
    - INI/environment configuration and a small CLI for .eml files

Example::

    from mandrill_mailer import MandrillMailer

    mailer = MandrillMailer(api_key="md-XXXXXXXX")
    mailer.send(message)
"""

from mandrill_mailer.exceptions import (
    MandrillApiError,
    MandrillDispatchError,
    MandrillError,
    MandrillParseError,
    MandrillValidationError,
)
from mandrill_mailer.mailer import MandrillMailer
from mandrill_mailer.message import MandrillMessage
from mandrill_mailer.models import AttachmentParams, ProviderParams, Recipient, RequestEnvelope

__version__ = "0.2.0"

__all__ = [
    "AttachmentParams",
    "MandrillApiError",
    "MandrillDispatchError",
    "MandrillError",
    "MandrillMailer",
    "MandrillMessage",
    "MandrillParseError",
    "MandrillValidationError",
    "ProviderParams",
    "Recipient",
    "RequestEnvelope",
]
