"""
Low-level pipeline client for the notes database.

This "escape hatch" is also used internally by NotesService. It takes
``Statement`` models, returns a validated ``PipelineResponse`` and hides the
HTTP details: bearer auth, timeout, status mapping, embedded SQL errors.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

import requests

from jot.exceptions import RemoteError, TransportError

from .codec import decode_response, encode_request
from .models.pipeline import PipelineResponse, Statement

LOGGER = logging.getLogger(__name__)

PIPELINE_PATH = "/v2/pipeline"


# ------------------------------- Transport -----------------------------------


class _PipelineTransport:
    """
    Minimal HTTP transport:
      - one POST per call, JSON bytes in, raw bytes out
      - response always closed before returning
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout
        LOGGER.debug("Initialized _PipelineTransport with base_url: %s", self._base_url)

    @property
    def url(self) -> str:
        return f"{self._base_url}{PIPELINE_PATH}"

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }

    def post(self, body: bytes) -> Tuple[int, bytes]:
        """POST ``body``; returns ``(status_code, content)`` for 2xx replies."""
        url = self.url
        LOGGER.info("POST to %s", url)
        try:
            with self._session.post(
                url, data=body, headers=self._headers(), timeout=self._timeout
            ) as resp:
                code = resp.status_code
                content = resp.content
        except requests.Timeout as e:
            LOGGER.error("POST to %s timed out after %ss", url, self._timeout)
            raise TransportError(f"request timed out after {self._timeout}s: {e}") from e
        except requests.RequestException as e:
            LOGGER.error("POST to %s failed: %s", url, e)
            raise TransportError(f"request failed (are you online?): {e}") from e

        LOGGER.debug("POST to %s returned status %d", url, code)
        if not 200 <= code < 300:
            text = content.decode("utf-8", errors="replace")
            LOGGER.error("POST to %s failed with code %d", url, code)
            raise RemoteError(
                f"turso API error ({code}): {text}", status_code=code, body=text
            )
        return code, content


# ------------------------------ Raw client -----------------------------------


class PipelineClient:
    """
    Raw pipeline service. ``execute`` maps 1:1 to /v2/pipeline.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ):
        self._http = _PipelineTransport(base_url, token, session, timeout)

    @property
    def url(self) -> str:
        return self._http.url

    def execute(self, statements: Sequence[Statement]) -> PipelineResponse:
        LOGGER.info("Executing pipeline with %d statement(s).", len(statements))
        body = encode_request(statements)
        code, content = self._http.post(body)
        resp = decode_response(content)

        # a 2xx can still carry a per-statement error
        err = resp.first_error()
        if err is not None:
            LOGGER.error("Pipeline returned statement error: %s", err.message)
            raise RemoteError(
                f"SQL error: {err.message}",
                status_code=code,
                body=content.decode("utf-8", errors="replace"),
            )
        return resp


__all__ = ["PipelineClient"]
