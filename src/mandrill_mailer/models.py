# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Pydantic models for the Mandrill ``messages/send`` API.

These models describe the JSON payload Mandrill expects. They are built
fresh for every send call and serialized with ``exclude_none=True`` so
optional fields that were never set do not appear on the wire.

Models:
    - Recipient: One entry of the flattened ``to`` list
    - AttachmentParams: An attachment or inline image entry
    - ProviderParams: The ``message`` object of a send request
    - RequestEnvelope: The full request body (key + message + async flag)
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

RecipientType = Literal["to", "cc", "bcc"]


class Recipient(BaseModel):
    """A single recipient tagged with its role.

    Attributes:
        email: Recipient address.
        name: Display name, omitted when the address had none.
        type: Recipient role ("to", "cc" or "bcc").
    """

    model_config = ConfigDict(extra="forbid")

    email: Annotated[
        str,
        Field(min_length=1, description="Recipient email address")
    ]
    name: Annotated[
        str | None,
        Field(default=None, description="Recipient display name")
    ]
    type: Annotated[
        RecipientType,
        Field(default="to", description="Recipient role")
    ]


class AttachmentParams(BaseModel):
    """Attachment entry with base64 content.

    Also used for inline images, where ``name`` is the Content-ID.

    Attributes:
        type: MIME type of the content.
        name: Filename (or Content-ID for images).
        content: Base64-encoded payload without line breaks.
    """

    model_config = ConfigDict(extra="forbid")

    type: Annotated[
        str,
        Field(min_length=1, description="MIME content type")
    ]
    name: Annotated[
        str,
        Field(min_length=1, description="Attachment filename")
    ]
    content: Annotated[
        str,
        Field(description="Base64-encoded content")
    ]


class ProviderParams(BaseModel):
    """The ``message`` object accepted by Mandrill's ``messages/send``.

    Generic messages fill the core fields (subject through attachments).
    Prepared messages may also set the Mandrill-specific options.
    Any other ``messages/send`` option (``merge_vars``, ``inline_css``, ...)
    is accepted as an extra field and sent unchanged.
    """

    model_config = ConfigDict(extra="allow")

    subject: Annotated[
        str | None,
        Field(default=None, description="Message subject")
    ]
    text: Annotated[
        str | None,
        Field(default=None, description="Plain-text body")
    ]
    html: Annotated[
        str | None,
        Field(default=None, description="HTML body")
    ]
    from_email: Annotated[
        str | None,
        Field(default=None, description="Sender address")
    ]
    from_name: Annotated[
        str | None,
        Field(default=None, description="Sender display name")
    ]
    to: Annotated[
        list[Recipient],
        Field(default_factory=list, description="Recipients of every role, to then cc then bcc")
    ]
    headers: Annotated[
        dict[str, str],
        Field(default_factory=dict, description="Extra headers not mapped elsewhere")
    ]
    tags: Annotated[
        list[str] | None,
        Field(default=None, description="Tags from the Tags header")
    ]
    attachments: Annotated[
        list[AttachmentParams] | None,
        Field(default=None, description="File attachments")
    ]
    images: Annotated[
        list[AttachmentParams] | None,
        Field(default=None, description="Inline images referenced by Content-ID")
    ]

    # Mandrill options, only set by prepared messages
    important: bool | None = None
    track_opens: bool | None = None
    track_clicks: bool | None = None
    auto_text: bool | None = None
    auto_html: bool | None = None
    preserve_recipients: bool | None = None
    merge: bool | None = None
    global_merge_vars: list[dict[str, Any]] | None = None
    metadata: dict[str, str] | None = None
    subaccount: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready mapping sent as ``message``."""
        return self.model_dump(mode="json", exclude_none=True)


class RequestEnvelope(BaseModel):
    """Request body for a Mandrill API call.

    Attributes:
        key: Mandrill API key.
        message: Message parameters.
        async_: Ask Mandrill to process the message asynchronously
            (serialized as ``async``).
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    key: Annotated[
        str,
        Field(description="Mandrill API key, passed through as-is")
    ]
    message: ProviderParams
    async_: Annotated[
        bool,
        Field(default=True, alias="async", description="Provider-side async processing")
    ]

    def to_json(self) -> str:
        """Serialize the envelope as the JSON request body."""
        return self.model_dump_json(by_alias=True, exclude_none=True)
