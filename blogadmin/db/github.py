import logging
from typing import Optional

import httpx

from blogadmin.errors import AuthError, ConflictError, RemoteError, TransportError
from blogadmin.settings import RepoConfig

logger = logging.getLogger(__name__)

ACCEPT_HEADER = "application/vnd.github+json"


def get_github_client(config: RepoConfig) -> httpx.Client:
    """
    Create an HTTP client for the repository hosting API.
    Called at runtime to avoid import-time connections.
    """
    return httpx.Client(
        base_url=config.api_url,
        timeout=httpx.Timeout(config.timeout_seconds),
        headers={"Accept": ACCEPT_HEADER},
    )


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}", "Accept": ACCEPT_HEADER}


def send(
    client: httpx.Client,
    method: str,
    url: str,
    token: str,
    *,
    json: Optional[dict] = None,
    params: Optional[dict] = None,
) -> httpx.Response:
    """Perform one request and translate failures into the error taxonomy."""
    try:
        response = client.request(
            method, url, headers=auth_headers(token), json=json, params=params
        )
    except httpx.RequestError as e:
        logger.error(f"HTTP connection error on {method} {url}: {e}")
        raise TransportError(f"Could not reach the remote API: {e}") from e

    raise_for_status(response, f"{method} {url}")
    return response


def raise_for_status(response: httpx.Response, action: str) -> None:
    status = response.status_code
    if 200 <= status < 300:
        return

    detail = _error_message(response)
    logger.warning(f"{action} failed with {status}: {detail}")

    if status in (401, 403):
        raise AuthError(f"Credential rejected by the remote API: {detail}")
    if status == 409:
        raise ConflictError(f"The post was changed remotely, reload it first: {detail}")
    if status == 422 and "sha" in detail:
        # The contents API answers 422 when a create targets an existing path
        raise ConflictError(f"A post with this filename already exists: {detail}")
    raise RemoteError(f"Remote API error ({status}): {detail}", status_code=status)


def json_body(response: httpx.Response, expected: type = dict):
    """Decode a success body, raising RemoteError when it is not the expected JSON shape."""
    try:
        payload = response.json()
    except ValueError as e:
        logger.warning(f"Non-JSON response from {response.request.url}: {e}")
        raise RemoteError(
            "Remote API returned an unreadable response",
            status_code=response.status_code,
        ) from e
    if not isinstance(payload, expected):
        raise RemoteError(
            f"Remote API returned an unexpected payload ({type(payload).__name__})",
            status_code=response.status_code,
        )
    return payload


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.text or response.reason_phrase
