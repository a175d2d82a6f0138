"""Shared fixtures for mandrill-mailer tests."""

from email.message import EmailMessage

import pytest


@pytest.fixture
def make_message():
    """Build an EmailMessage with sensible defaults."""

    def _make(
        from_addr: str | None = "Shop <noreply@shop.example>",
        to: str | None = "Alice <alice@example.com>",
        cc: str | None = None,
        bcc: str | None = None,
        subject: str = "Your order",
        text: str | None = "Thanks for your order.",
        html: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> EmailMessage:
        msg = EmailMessage()
        if from_addr is not None:
            msg["From"] = from_addr
        if to is not None:
            msg["To"] = to
        if cc is not None:
            msg["Cc"] = cc
        if bcc is not None:
            msg["Bcc"] = bcc
        msg["Subject"] = subject
        for name, value in (headers or {}).items():
            msg[name] = value
        if text is not None:
            msg.set_content(text)
        if html is not None:
            if text is None:
                msg.set_content(html, subtype="html")
            else:
                msg.add_alternative(html, subtype="html")
        return msg

    return _make
