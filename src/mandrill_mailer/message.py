# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Email message carrying pre-built Mandrill parameters.

A plain :class:`email.message.EmailMessage` is translated field by field.
Applications that need Mandrill options (tracking, merge vars, metadata)
can instead send a :class:`MandrillMessage`, whose parameters are used
verbatim. Attachments are still read from the MIME parts of the message.

Example::

    params = ProviderParams(
        subject="Welcome",
        html="<p>Hi *|FNAME|*</p>",
        from_email="noreply@example.com",
        to=[Recipient(email="alice@example.com")],
        merge=True,
        track_opens=True,
    )
    message = MandrillMessage(params)
    message.add_attachment(b"...", maintype="application", subtype="pdf",
                           filename="terms.pdf")
    mailer.send(message)
"""

from __future__ import annotations

from email.message import EmailMessage
from email.policy import Policy

from mandrill_mailer.models import ProviderParams


class MandrillMessage(EmailMessage):
    """EmailMessage variant that embeds its own :class:`ProviderParams`."""

    def __init__(self, mandrill_params: ProviderParams | None = None, policy: Policy | None = None):
        super().__init__(policy=policy)
        self.mandrill_params = mandrill_params if mandrill_params is not None else ProviderParams()
