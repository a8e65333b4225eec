"""HTTP client for chat-ops incoming webhooks.

Posts a rendered payload as a form-encoded ``payload=`` parameter and
returns the raw response body. Classifying the response is left to the
caller.
"""

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

import requests
from requests.exceptions import InvalidSchema, InvalidURL, MissingSchema, RequestException

from jobhook.exceptions import InvalidUrlError, WebhookConnectionError

logger = logging.getLogger(__name__)

FORM_HEADERS = {
    "Content-Type": "application/x-www-form-urlencoded; charset=utf-8",
}


@dataclass(frozen=True)
class WebhookResponse:
    """Status code and decoded body of a webhook response."""

    status_code: int
    body: str

    @property
    def is_success_status(self) -> bool:
        return 200 <= self.status_code < 300


def validate_url(url: str) -> str:
    """Check that ``url`` is an absolute http(s) URL.

    Returns:
        The stripped URL

    Raises:
        InvalidUrlError: If the URL is empty, not http(s), or unparseable
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidUrlError("Webhook URL is empty", url=url)

    url = url.strip()
    if not url.startswith(("http://", "https://")):
        raise InvalidUrlError(
            f"Webhook URL is malformed: [{url}]. Must start with http:// or https://",
            url=url,
        )

    try:
        requests.Request("POST", url).prepare()
    except (MissingSchema, InvalidSchema, InvalidURL) as e:
        raise InvalidUrlError(f"Webhook URL is malformed: [{e}].", url=url) from e

    return url


def encode_payload(payload: str) -> bytes:
    """Encode a payload as a UTF-8 ``payload=<url-encoded>`` form body."""
    return urlencode({"payload": payload}, encoding="utf-8").encode("ascii")


class WebhookClient:
    """Posts payloads to incoming webhooks.

    A new session is opened for every call and closed on every exit path,
    so one client can be shared between concurrent callers.

    Args:
        timeout: Request timeout in seconds (default: None, wait indefinitely)
        verify_ssl: Verify SSL certificates (default: True)
    """

    def __init__(self, timeout: float | None = None, verify_ssl: bool = True) -> None:
        self.timeout = timeout
        self.verify_ssl = verify_ssl

    def post(self, webhook_url: str, payload: str) -> WebhookResponse:
        """POST ``payload`` to the webhook and read the response.

        The response body is read whatever the HTTP status, so error
        payloads returned by the endpoint are available for diagnostics.

        Raises:
            InvalidUrlError: If webhook_url is not a valid http(s) URL
            WebhookConnectionError: If the request cannot be sent or read
        """
        url = validate_url(webhook_url)
        body = encode_payload(payload)

        logger.debug(f"POST {len(body)} bytes to webhook")

        with requests.Session() as session:
            try:
                with session.post(
                    url,
                    data=body,
                    headers=FORM_HEADERS,
                    timeout=self.timeout,
                    verify=self.verify_ssl,
                ) as response:
                    result = WebhookResponse(
                        status_code=response.status_code,
                        body=response.content.decode("utf-8", errors="replace"),
                    )
            except RequestException as e:
                raise WebhookConnectionError(
                    f"Error sending data to webhook URL: [{e}].",
                    url=url,
                ) from e

        logger.debug(f"Webhook response: {result.status_code}")
        return result

    def deliver(self, webhook_url: str, payload: str) -> str:
        """POST ``payload`` and return the response body verbatim.

        Raises:
            InvalidUrlError: If webhook_url is not a valid http(s) URL
            WebhookConnectionError: If the request cannot be sent or read
        """
        return self.post(webhook_url, payload).body
