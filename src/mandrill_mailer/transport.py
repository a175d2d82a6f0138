# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""HTTP transport for the Mandrill API.

One synchronous ``requests.post`` per call, no retries. The response is
interpreted as follows:

- 200 with a JSON body: the decoded body is returned as-is
- 200 with an undecodable (or ``null``) body: :class:`MandrillParseError`
- any other status: :class:`MandrillApiError` with the ``message`` field
  of the body, or a fallback text when the body is not JSON
- network failure before a response: :class:`MandrillDispatchError`
"""

from __future__ import annotations

from typing import Any

import requests

from mandrill_mailer.exceptions import MandrillApiError, MandrillDispatchError, MandrillParseError
from mandrill_mailer.logger import get_logger
from mandrill_mailer.models import ProviderParams, RequestEnvelope

DEFAULT_ENDPOINT = "https://mandrillapp.com/api/1.0"
DEFAULT_API_FORMAT = "json"
DEFAULT_CONNECT_TIMEOUT = 30
DEFAULT_TIMEOUT = 600
DEFAULT_USER_AGENT = "Mandrill-Python/0.2"

SEND_METHOD = "/messages/send"
UNPARSEABLE_RESPONSE = "Unable to parse JSON response"


class TransportClient:
    """Send :class:`ProviderParams` to Mandrill and decode the response.

    Args:
        api_key: Mandrill API key, sent in the request body.
        endpoint: API base URL.
        api_format: Response format suffix of the method path.
        connect_timeout: Seconds allowed to establish the connection.
        timeout: Seconds allowed to wait for the response.
        user_agent: User-Agent header value.
        async_sending: Value of the ``async`` flag of the request.
    """

    def __init__(
        self,
        api_key: str,
        endpoint: str = DEFAULT_ENDPOINT,
        api_format: str = DEFAULT_API_FORMAT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        async_sending: bool = True,
    ):
        self.api_key = api_key
        self.endpoint = endpoint.rstrip("/")
        self.api_format = api_format
        self.connect_timeout = connect_timeout
        self.timeout = timeout
        self.user_agent = user_agent
        self.async_sending = async_sending
        self.logger = get_logger("MandrillTransport")

    def url_for(self, method: str) -> str:
        """Build the full URL of an API method, e.g. ``.../messages/send.json``."""
        return f"{self.endpoint}{method}.{self.api_format}"

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": f"application/{self.api_format}",
            "User-Agent": self.user_agent,
        }

    def build_envelope(self, params: ProviderParams) -> RequestEnvelope:
        """Wrap message parameters with the API key and async flag."""
        return RequestEnvelope(key=self.api_key, message=params, async_=self.async_sending)

    def send(self, params: ProviderParams) -> Any:
        """Call ``messages/send`` with the given message parameters.

        Returns:
            The decoded JSON response (for Mandrill, a list of per-recipient
            results).

        Raises:
            MandrillDispatchError: The request could not be performed.
            MandrillParseError: Status 200 but the body is not valid JSON.
            MandrillApiError: Mandrill answered with a non-200 status.
        """
        envelope = self.build_envelope(params)
        return self._call(SEND_METHOD, envelope.to_json())

    def _call(self, method: str, body: str) -> Any:
        url = self.url_for(method)
        self.logger.debug("POST %s", url)
        try:
            resp = requests.post(
                url,
                data=body.encode("utf-8"),
                headers=self._headers(),
                timeout=(self.connect_timeout, self.timeout),
            )
        except requests.RequestException as exc:
            self.logger.error("Error while calling %s: %s", method, exc)
            raise MandrillDispatchError(f"Error while calling {method}: {exc}") from exc

        status = resp.status_code
        try:
            result = resp.json()
        except ValueError:
            result = None

        if status == 200:
            if result is None:
                raise MandrillParseError(UNPARSEABLE_RESPONSE)
            return result

        api_message = UNPARSEABLE_RESPONSE
        if isinstance(result, dict) and result.get("message") is not None:
            api_message = str(result["message"])
        self.logger.warning("Mandrill rejected %s with status %s: %s", method, status, api_message)
        raise MandrillApiError(status, api_message)
