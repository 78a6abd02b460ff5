from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict


def _env_extra_mode(default: str = "ignore") -> str:
    """
    Determine the extra-mode from environment vars.

    JOT_WIRE_EXTRA: allow|forbid|ignore
    Convenience booleans: "true/1/on" -> forbid (strict), "false/0/off" -> ignore
    """
    raw = (os.getenv("JOT_WIRE_EXTRA") or default).strip().lower()

    if raw in {"allow", "forbid", "ignore"}:
        return raw

    if raw in {"1", "true", "yes", "on", "strict"}:
        return "forbid"
    if raw in {"0", "false", "no", "off", "lenient"}:
        return "ignore"

    return default


_EXTRA = _env_extra_mode()


class PipelineModel(BaseModel):
    """
    Project-wide base model for pipeline wire shapes.

    The server adds keys we do not read (baton, base_url, rows_read, ...), so
    the default is extra='ignore'. Tighten it while debugging:
      export JOT_WIRE_EXTRA=forbid
    """

    model_config = ConfigDict(extra=_EXTRA)


__all__ = ["PipelineModel", "_env_extra_mode"]
