# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exceptions raised by the Mandrill mailer.

All errors derive from :class:`MandrillError`, so callers that only care
about "the mail was not accepted" can catch a single class. Each subclass
carries a short ``code`` identifying the failure kind.
"""

from __future__ import annotations


class MandrillError(Exception):
    """Base class for every failure surfaced by the mailer."""

    code = "mandrill_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MandrillValidationError(MandrillError, ValueError):
    """Raised when a message cannot be translated (e.g. no sender)."""

    code = "validation_error"


class MandrillDispatchError(MandrillError):
    """Raised when the HTTP request could not be performed."""

    code = "dispatch_error"


class MandrillParseError(MandrillError):
    """Raised when a 200 response carries a body that is not valid JSON."""

    code = "parse_error"


class MandrillApiError(MandrillError):
    """Raised when Mandrill answers with a non-200 status.

    Attributes:
        status: HTTP status code of the response (None if unknown).
        api_message: Message reported by Mandrill, or a fallback text.
    """

    code = "api_error"

    def __init__(self, status: int | None, api_message: str):
        super().__init__(f"Error {status} Message: {api_message}")
        self.status = status
        self.api_message = api_message
