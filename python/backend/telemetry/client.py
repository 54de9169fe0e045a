"""HTTP client for the Turbo DA data-availability API."""

from __future__ import annotations

import logging

import requests

from backend.telemetry.errors import ConfigurationError, RateLimitError, TurboDAError
from backend.telemetry.models import SubmissionInfo, SubmissionResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://staging.turbo-api.availproject.org"
DEFAULT_TIMEOUT = 10.0
DEFAULT_RETRY_AFTER = 60


class TurboDAClient:
    """Thin wrapper over the three Turbo DA endpoints the game uses.

    Every failure surfaces as a ``TurboDAError`` (``RateLimitError`` for HTTP
    429) so callers only have one exception family to handle.
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("TURBODA_API_KEY is not configured")
        if not base_url:
            raise ConfigurationError("TURBO_DA_BASE_URL is not configured")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"x-api-key": api_key})

    # -- endpoints ------------------------------------------------------------

    def submit_raw_data(self, data: str | bytes) -> SubmissionResponse:
        """POST opaque bytes; returns the submission id."""
        body = data.encode("utf-8") if isinstance(data, str) else data
        logger.debug("Submitting %d bytes to Turbo DA", len(body))
        resp = self._request(
            "POST",
            "/v1/submit_raw_data",
            data=body,
            headers={"Content-Type": "application/octet-stream"},
        )
        payload = self._json(resp)
        submission_id = payload.get("submission_id")
        if not submission_id:
            raise TurboDAError("Response did not contain a submission_id", resp.status_code)
        logger.debug("Turbo DA accepted submission %s", submission_id)
        return SubmissionResponse(submission_id=str(submission_id))

    def get_submission_info(self, submission_id: str) -> SubmissionInfo:
        if not submission_id:
            raise ValueError("submission_id is required")
        resp = self._request(
            "GET",
            "/v1/get_submission_info",
            params={"submission_id": submission_id},
        )
        info = SubmissionInfo.from_dict(self._json(resp))
        logger.debug(
            "Submission %s is %s (block %s, tx %s)",
            info.id, info.state, info.data.block_number, info.data.tx_hash,
        )
        return info

    def get_pre_image(self, submission_id: str) -> bytes:
        """Fetch the raw bytes originally submitted under *submission_id*."""
        if not submission_id:
            raise ValueError("submission_id is required")
        resp = self._request(
            "GET",
            "/v1/get_pre_image",
            params={"submission_id": submission_id},
        )
        return resp.content

    def close(self) -> None:
        self._session.close()

    # -- helpers --------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            resp = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.warning("Turbo DA request %s %s failed: %s", method, path, exc)
            raise TurboDAError(f"Network error: {exc}") from exc

        logger.debug("Turbo DA %s %s -> %d", method, path, resp.status_code)

        if resp.status_code == 429:
            retry_after = _parse_retry_after(resp.headers.get("retry-after"))
            logger.warning("Turbo DA rate limit hit, retry after %ss", retry_after)
            raise RateLimitError(retry_after)

        if not resp.ok:
            message = _error_message(resp)
            logger.warning("Turbo DA error on %s %s: %s", method, path, message)
            raise TurboDAError(message, resp.status_code)

        return resp

    @staticmethod
    def _json(resp: requests.Response) -> dict:
        try:
            payload = resp.json()
        except ValueError as exc:
            raise TurboDAError("Turbo DA returned a non-JSON response", resp.status_code) from exc
        if not isinstance(payload, dict):
            raise TurboDAError("Turbo DA returned an unexpected response", resp.status_code)
        return payload


def _parse_retry_after(value: str | None) -> int:
    try:
        return int(value) if value else DEFAULT_RETRY_AFTER
    except ValueError:
        return DEFAULT_RETRY_AFTER


def _error_message(resp: requests.Response) -> str:
    fallback = f"HTTP error! status: {resp.status_code}"
    try:
        payload = resp.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return fallback
