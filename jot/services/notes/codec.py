"""
Pure translation between statements/results and pipeline JSON bytes.

No I/O happens here; the transport in ``client`` owns the network.
"""

from __future__ import annotations

import logging
from typing import Sequence, Union

from pydantic import ValidationError

from jot.exceptions import DecodingError, EncodingError

from .models.pipeline import (
    CloseRequest,
    ExecuteRequest,
    PipelineRequest,
    PipelineResponse,
    Statement,
)

LOGGER = logging.getLogger(__name__)


def build_request(statements: Sequence[Statement]) -> PipelineRequest:
    """One execute directive per statement, then exactly one close."""
    try:
        requests = [ExecuteRequest(stmt=s) for s in statements]
    except ValidationError as e:
        LOGGER.error("Statement validation failed: %s", e)
        raise EncodingError(f"invalid statement: {e}") from e
    return PipelineRequest(requests=[*requests, CloseRequest()])


def encode_request(statements: Sequence[Statement]) -> bytes:
    request = build_request(statements)
    try:
        data = request.model_dump_json(exclude_none=True).encode("utf-8")
    except ValueError as e:
        LOGGER.error("Request serialization failed: %s", e)
        raise EncodingError(f"marshal request: {e}") from e
    LOGGER.debug(
        "Encoded pipeline request: %d directive(s), %d bytes",
        len(request.requests),
        len(data),
    )
    return data


def decode_response(data: Union[bytes, str]) -> PipelineResponse:
    try:
        resp = PipelineResponse.model_validate_json(data)
    except ValidationError as e:
        LOGGER.error("Pipeline response validation failed.")
        raise DecodingError(f"parse response: {e}", payload=data) from e
    LOGGER.debug("Decoded pipeline response with %d result(s).", len(resp.results))
    return resp


__all__ = ["build_request", "decode_response", "encode_request"]
