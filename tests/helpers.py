"""Shared builders for pipeline payloads and stubbed HTTP sessions."""

import json
from unittest.mock import MagicMock


def note_row(note_id, body, created_at="2024-01-02 03:04:05"):
    return [
        {"type": "integer", "value": str(note_id)},
        {"type": "text", "value": body},
        {"type": "text", "value": created_at},
    ]


def execute_ok(rows=None, affected=0, last_insert_rowid=None):
    result = {
        "cols": [
            {"name": "id", "decltype": "INTEGER"},
            {"name": "body", "decltype": "TEXT"},
            {"name": "created_at", "decltype": "TEXT"},
        ],
        "rows": rows or [],
        "affected_row_count": affected,
        "last_insert_rowid": last_insert_rowid,
        "replication_index": None,
        "rows_read": len(rows or []),
    }
    return {"type": "ok", "response": {"type": "execute", "result": result}}


CLOSE_OK = {"type": "ok", "response": {"type": "close"}}


def pipeline_body(*results):
    return json.dumps(
        {"baton": None, "base_url": None, "results": [*results, CLOSE_OK]}
    ).encode("utf-8")


def http_response(status=200, content=b"{}"):
    resp = MagicMock()
    resp.status_code = status
    resp.content = content
    resp.__enter__.return_value = resp
    return resp


def stub_session(*responses):
    """A session whose successive POSTs return ``responses``."""
    session = MagicMock()
    session.post.side_effect = list(responses)
    return session


def sent_payload(session, call=0):
    """Decode the JSON body of the ``call``-th POST made on ``session``."""
    kwargs = session.post.call_args_list[call].kwargs
    return json.loads(kwargs["data"])
