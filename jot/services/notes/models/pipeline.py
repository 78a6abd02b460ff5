"""
Pipeline ("/v2/pipeline") wire models.
- Request models (execute/close directives, statements, typed arguments).
- Response models (per-directive ok/error results, typed row cells).
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import (
    ConfigDict,
    Field,
    JsonValue,
    RootModel,
    TypeAdapter,
    model_validator,
)

from ._base import PipelineModel

# ---------------------------------------------------------------------------
# Typed values shared by statement arguments and result cells
# ---------------------------------------------------------------------------


class _ValueBase(PipelineModel):
    # Every value wrapper carries a 'type' discriminator
    type: str


class TextValue(_ValueBase):
    type: Literal["text"] = "text"
    value: str


class IntegerValue(_ValueBase):
    # The wire sends integers as decimal strings; some servers send numbers.
    # Keep whatever arrived, projection does the coercion.
    type: Literal["integer"] = "integer"
    value: Union[str, int]


class FloatValue(_ValueBase):
    type: Literal["float"] = "float"
    value: float


class NullValue(_ValueBase):
    type: Literal["null"] = "null"


class BlobValue(_ValueBase):
    # blobs carry a base64 payload instead of 'value'
    type: Literal["blob"] = "blob"
    base64: str

    @property
    def value(self) -> str:
        return self.base64


class PassthroughValue(_ValueBase):
    model_config = ConfigDict(extra="allow")

    type: str
    value: JsonValue = None


KNOWN_TAGS: frozenset[str] = frozenset({"text", "integer", "float", "null", "blob"})

KnownValue = Annotated[
    Union[TextValue, IntegerValue, FloatValue, NullValue, BlobValue],
    Field(discriminator="type"),
]

_KNOWN_VALUE = TypeAdapter(KnownValue)


class WireValue(RootModel[Union[KnownValue, PassthroughValue]]):
    """
    A {type, value} pair as it appears on the wire.

      - `.value`: the inner value, still in wire form (e.g. "42" for integers)
      - `.type_tag`: the wire `type` string
      - `.unwrap()`: the inner typed wrapper (e.g. `IntegerValue`)

    Unknown tags are kept as `PassthroughValue` so they dump back unchanged.
    """

    root: Union[KnownValue, PassthroughValue]

    @property
    def value(self):
        return getattr(self.root, "value", None)

    @property
    def type_tag(self) -> str:
        return self.root.type

    def unwrap(self):
        return self.root

    @model_validator(mode="before")
    @classmethod
    def _dispatch_before(cls, obj):
        """
        Route known tags through the discriminated union and everything else
        to PassthroughValue. Returns the underlying value, not {'root': ...}.
        """
        if isinstance(obj, _ValueBase):
            return obj

        t = obj.get("type") if isinstance(obj, dict) else None
        if t in KNOWN_TAGS:
            return _KNOWN_VALUE.validate_python(obj)

        if isinstance(obj, dict) and "type" in obj:
            return PassthroughValue(**obj)

        return PassthroughValue(type="unknown", value=obj)


def text_value(value: str) -> WireValue:
    return WireValue(TextValue(value=value))


def integer_value(value: int) -> WireValue:
    """Integers travel as their decimal string."""
    return WireValue(IntegerValue(value=str(int(value))))


# ---------------------------------------------------------------------------
# Request side
# ---------------------------------------------------------------------------


class Statement(PipelineModel):
    """One parameterized SQL instruction."""

    sql: str
    args: Optional[List[WireValue]] = None

    @model_validator(mode="after")
    def _drop_empty_args(self):
        # empty args are omitted from the payload entirely
        if not self.args:
            self.args = None
        return self


class ExecuteRequest(PipelineModel):
    type: Literal["execute"] = "execute"
    stmt: Statement


class CloseRequest(PipelineModel):
    type: Literal["close"] = "close"


StreamRequest = Annotated[
    Union[ExecuteRequest, CloseRequest], Field(discriminator="type")
]


class PipelineRequest(PipelineModel):
    requests: List[StreamRequest]


# ---------------------------------------------------------------------------
# Response side
# ---------------------------------------------------------------------------


class Column(PipelineModel):
    name: Optional[str] = None
    decltype: Optional[str] = None


class ExecuteResult(PipelineModel):
    cols: List[Column] = Field(default_factory=list)
    rows: List[List[WireValue]] = Field(default_factory=list)
    affected_row_count: int = 0
    last_insert_rowid: Optional[Union[str, int]] = None


class StreamResponse(PipelineModel):
    # "execute" carries a result; "close" does not
    type: str
    result: Optional[ExecuteResult] = None


class StatementError(PipelineModel):
    message: str
    code: Optional[str] = None


class OkResult(PipelineModel):
    type: Literal["ok"]
    response: Optional[StreamResponse] = None


class ErrorResult(PipelineModel):
    type: Literal["error"]
    error: StatementError


StreamResult = Annotated[Union[OkResult, ErrorResult], Field(discriminator="type")]


class PipelineResponse(PipelineModel):
    results: List[StreamResult] = Field(default_factory=list)

    def first_error(self) -> Optional[StatementError]:
        """First embedded statement error, in result order."""
        for r in self.results:
            if isinstance(r, ErrorResult):
                return r.error
        return None


__all__ = [
    "BlobValue",
    "CloseRequest",
    "Column",
    "ErrorResult",
    "ExecuteRequest",
    "ExecuteResult",
    "FloatValue",
    "IntegerValue",
    "KNOWN_TAGS",
    "NullValue",
    "OkResult",
    "PassthroughValue",
    "PipelineRequest",
    "PipelineResponse",
    "Statement",
    "StatementError",
    "StreamResponse",
    "TextValue",
    "WireValue",
    "integer_value",
    "text_value",
]
