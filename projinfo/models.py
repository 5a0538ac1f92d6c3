"""Pydantic models for requests, per-field results, settings and pass summaries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Literal, Mapping

import json
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import FieldUnsupported, QueryFault


class ProjectField(str, Enum):
    """Field identifiers understood by the provider."""

    NAME = "name"
    DIRECTORY = "directory"
    INSTANCE_ID = "instance_id"
    TYPE_ID = "type_id"


class FieldStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"


class FieldResult(BaseModel):
    """One slot of an AttributeResult."""

    field: str
    status: FieldStatus
    value: Any = None
    reason: str | None = Field(default=None, description="Why the field failed, if it did")

    @property
    def ok(self) -> bool:
        return self.status is FieldStatus.OK


class AttributeRequest(BaseModel):
    """Ordered field identifiers for one batched query, reused for every node of a pass."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["scalar", "identity"]
    fields: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.fields)


class AttributeResult(BaseModel):
    """Parallel sequence of per-field outcomes; slot i answers request field i."""

    request: AttributeRequest
    slots: list[FieldResult]

    @model_validator(mode="after")
    def _slots_match_request(self) -> AttributeResult:
        if [slot.field for slot in self.slots] != list(self.request.fields):
            raise ValueError("Result slots must match the request fields one to one")
        return self

    def __len__(self) -> int:
        return len(self.slots)

    def slot(self, field: str) -> FieldResult | None:
        for slot in self.slots:
            if slot.field == field:
                return slot
        return None

    def succeeded(self, field: str) -> bool:
        slot = self.slot(field)
        return slot is not None and slot.ok

    def value(self, field: str) -> Any:
        """Return the value of ``field``, raising FieldUnsupported if it failed."""
        slot = self.slot(field)
        if slot is None or not slot.ok:
            raise FieldUnsupported(field)
        return slot.value

    def ok_values(self) -> dict[str, Any]:
        return {slot.field: slot.value for slot in self.slots if slot.ok}


SCALAR_REQUEST = AttributeRequest(
    kind="scalar", fields=(ProjectField.NAME.value, ProjectField.DIRECTORY.value)
)
IDENTITY_REQUEST = AttributeRequest(
    kind="identity", fields=(ProjectField.INSTANCE_ID.value, ProjectField.TYPE_ID.value)
)


@dataclass
class NodeInspection:
    """Everything learned about one node during a pass."""

    label: str
    queryable: bool
    scalar: AttributeResult | None = None
    identity: AttributeResult | None = None
    fault: QueryFault | None = None
    cancelled: bool = False

    def values(self) -> dict[str, Any]:
        """Merged successful values of both queries."""
        merged: dict[str, Any] = {}
        for result in (self.scalar, self.identity):
            if result is not None:
                merged.update(result.ok_values())
        return merged


class PassSummary(BaseModel):
    """Counters describing how one enumeration pass went."""

    visited: int = 0
    reported: int = 0
    skipped: int = 0
    faults: int = 0
    cancelled: bool = False
    completed: bool = False
    error: str | None = None


class ReportSettings(BaseModel):
    """Settings for where and how reports are written."""

    channel_name: str = Field(default="General", min_length=1, description="Output channel name")
    pane_visible: bool = Field(default=True, description="Create the pane visible")
    clear_on_reset: bool = Field(default=True, description="Host clears the pane when the workspace resets")
    activate_pane: bool = Field(default=True, description="Bring the pane to the foreground before writing")
    completion_marker: str | None = Field(default=None, description="Text written after a pass that ran to the end")


# ---------------------------------------------------------------------------
# helpers


def coerce_settings(value: Any) -> ReportSettings:
    """Normalize supported inputs into a ReportSettings instance."""
    if value is None:
        return ReportSettings()
    if isinstance(value, ReportSettings):
        return value
    payload: Mapping[str, Any]
    if isinstance(value, Mapping):
        payload = value
    elif isinstance(value, Path):
        payload = _load_text_payload(value.read_text())
    elif isinstance(value, (str, bytes)):
        payload = _load_text_payload(value)
    else:
        raise TypeError("Unsupported value for report settings")
    try:
        return ReportSettings.model_validate(payload)
    except ValidationError as exc:
        raise ValueError("Invalid report settings payload") from exc


def _load_text_payload(raw: str | bytes) -> dict[str, Any]:
    """Interpret raw text as YAML first, falling back to JSON."""
    text = raw.decode() if isinstance(raw, bytes) else raw
    try:
        return yaml.safe_load(text) or {}
    except yaml.YAMLError:
        return json.loads(text)


__all__ = [
    "AttributeRequest",
    "AttributeResult",
    "FieldResult",
    "FieldStatus",
    "IDENTITY_REQUEST",
    "NodeInspection",
    "PassSummary",
    "ProjectField",
    "ReportSettings",
    "SCALAR_REQUEST",
    "coerce_settings",
]
