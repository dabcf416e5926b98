"""Prompteus neuron API client."""

import json
import logging
import time
from typing import Any, Literal, Mapping, Optional, Union, overload

import requests
from requests.structures import CaseInsensitiveDict

from .types import ErrorResult, SuccessResult

logger = logging.getLogger(__name__)

USER_AGENT = "prompteus-python/0.1.0"


class PrompteusError(Exception):
    """Raised when a neuron call fails.

    Args:
        status_code: HTTP status of the failure, or ``None`` if no response
            was received.
        error: Error message. Servers may send a structured value here; it is
            kept as decoded.
        payload: Any other fields the server sent in its error body.
    """

    def __init__(
        self,
        status_code: Optional[int],
        error: Any,
        payload: Optional[Mapping[str, Any]] = None,
    ):
        self.status_code = status_code
        self.error = error
        self.payload = dict(payload or {})
        message = error if isinstance(error, str) else json.dumps(error, default=str)
        if status_code is None:
            super().__init__(message)
        else:
            super().__init__(f"HTTP {status_code}: {message}")

    def to_dict(self) -> ErrorResult:
        """Return the error as ``{**payload, "error": ..., "statusCode": ...}``."""
        data = dict(self.payload)
        data["error"] = self.error
        data["statusCode"] = self.status_code
        return data


class InvalidArgumentError(PrompteusError):
    """A required identifier was missing. Raised before any request is sent."""

    def __init__(self, error: str):
        super().__init__(400, error)


class RemoteError(PrompteusError):
    """The API answered with a non-2xx status."""


class TransportError(PrompteusError):
    """The request never completed, or a success body could not be decoded."""


def resolve_credential(
    headers: Optional[Mapping[str, str]],
    override: Optional[str],
    stored: Optional[str],
) -> Optional[str]:
    """Pick the bearer credential to inject for a single call.

    An explicit ``Authorization`` header always wins and is sent as is, in
    which case nothing is injected and ``None`` is returned. Otherwise the
    per-call override beats the client's stored credential. ``None`` means
    the request goes out unauthenticated.
    """
    if headers and "Authorization" in CaseInsensitiveDict(headers):
        return None
    return override or stored or None


def _remote_error(resp: requests.Response) -> RemoteError:
    try:
        body = resp.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        payload = {k: v for k, v in body.items() if k not in ("error", "statusCode")}
        error = body.get("error")
        if error is None:
            error = resp.reason or "Neuron call failed"
        return RemoteError(resp.status_code, error, payload)

    if isinstance(body, str) and body:
        return RemoteError(resp.status_code, body)
    return RemoteError(resp.status_code, resp.text or resp.reason or "Neuron call failed")


class NeuronClient:
    """Client for calling neurons on the Prompteus platform.

    A credential (JWT or API key) can be given here, swapped later with
    :meth:`set_credential`, passed per call, or left out entirely for
    neurons with public access.

    Args:
        base_url: API base URL. Defaults to the production endpoint.
        credential: JWT or API key sent as a bearer token.
        timeout: Request timeout in seconds.
    """

    DEFAULT_URL = "https://run.prompteus.com"

    def __init__(
        self,
        base_url: str = DEFAULT_URL,
        credential: Optional[str] = None,
        timeout: Optional[float] = 30,
    ):
        self._base_url = (base_url or self.DEFAULT_URL).rstrip("/")
        self._credential = credential or None
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update(
            {
                "Content-Type": "application/json",
                "User-Agent": USER_AGENT,
            }
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def credential(self) -> Optional[str]:
        return self._credential

    def set_credential(self, credential: Optional[str]) -> None:
        """Replace the stored credential for all calls made from now on."""
        self._credential = credential

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "NeuronClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _post(self, url: str, **kwargs) -> requests.Response:
        kwargs.setdefault("timeout", self.timeout)
        logger.debug("POST %s", url)
        start = time.monotonic()
        try:
            resp = self._session.post(url, **kwargs)
        except requests.RequestException as exc:
            logger.warning("POST %s failed: %s", url, exc)
            raise TransportError(None, str(exc)) from exc

        logger.debug("Response: %s (%.2fs)", resp.status_code, time.monotonic() - start)
        if not 200 <= resp.status_code < 300:
            raise _remote_error(resp)
        return resp

    @overload
    def invoke_neuron(
        self,
        organization_slug: str,
        neuron_slug: str,
        *,
        bypass_cache: bool = ...,
        input: str = ...,
        raw_output: Literal[True],
        headers: Optional[Mapping[str, str]] = ...,
        credential: Optional[str] = ...,
    ) -> str: ...

    @overload
    def invoke_neuron(
        self,
        organization_slug: str,
        neuron_slug: str,
        *,
        bypass_cache: bool = ...,
        input: str = ...,
        raw_output: Literal[False] = ...,
        headers: Optional[Mapping[str, str]] = ...,
        credential: Optional[str] = ...,
    ) -> SuccessResult: ...

    def invoke_neuron(
        self,
        organization_slug: str,
        neuron_slug: str,
        *,
        bypass_cache: bool = False,
        input: str = "",
        raw_output: bool = False,
        headers: Optional[Mapping[str, str]] = None,
        credential: Optional[str] = None,
    ) -> Union[str, SuccessResult]:
        """Execute a neuron.

        Args:
            organization_slug: Slug of the organization owning the neuron.
            neuron_slug: Slug of the neuron to execute.
            bypass_cache: Force a fresh execution, skipping both exact and
                semantic caching on the server.
            input: Input string sent to the neuron.
            raw_output: Return the response body as text instead of
                decoding it.
            headers: Extra request headers. They take precedence over the
                defaults, and an ``Authorization`` entry here is never
                replaced by a stored or per-call credential.
            credential: JWT or API key for this call only. Overrides the
                client's stored credential.

        Returns:
            The response text if ``raw_output`` is set, otherwise the decoded
            JSON body (``output``, ``fromCache``, ``executionStopped``, ...).

        Raises:
            InvalidArgumentError: If either slug is missing.
            RemoteError: If the API returns a non-2xx status.
            TransportError: If the request fails or the body is not JSON.
        """
        if not organization_slug:
            raise InvalidArgumentError("Organization slug is required, not calling neuron.")
        if not neuron_slug:
            raise InvalidArgumentError("Neuron slug is required, not calling neuron.")

        params = {}
        if bypass_cache:
            params["bypassCache"] = "true"
        if raw_output:
            params["rawOutput"] = "true"

        request_headers = CaseInsensitiveDict(headers or {})
        token = resolve_credential(request_headers, credential, self._credential)
        if token:
            request_headers["Authorization"] = f"Bearer {token}"

        resp = self._post(
            f"{self._base_url}/{organization_slug}/{neuron_slug}",
            params=params,
            headers=request_headers,
            json={"input": input},
        )

        if raw_output:
            return resp.text
        try:
            return resp.json()
        except ValueError as exc:
            raise TransportError(
                resp.status_code, f"Malformed JSON in neuron response: {exc}"
            ) from exc

    def invoke_neuron_raw(self, organization_slug: str, neuron_slug: str, **options) -> str:
        """Same as :meth:`invoke_neuron` with ``raw_output=True``."""
        options["raw_output"] = True
        return self.invoke_neuron(organization_slug, neuron_slug, **options)
