"""Batched attribute queries against project nodes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from connectors.host_interface import HostStatus, QueryableNode

from .context import CancellationToken
from .errors import QueryFault
from .models import (
    IDENTITY_REQUEST,
    SCALAR_REQUEST,
    AttributeRequest,
    AttributeResult,
    FieldResult,
    FieldStatus,
    NodeInspection,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Queryable:
    """A node exposing the batched query capability."""

    handle: QueryableNode
    label: str


@dataclass(frozen=True)
class Opaque:
    """A node without the query capability; nothing is asked of it."""

    handle: Any
    label: str


def node_label(node: Any) -> str:
    label = getattr(node, "label", None)
    return str(label) if label else repr(node)


def classify(node: Any) -> Queryable | Opaque:
    """Resolve the capability of ``node`` once."""
    label = node_label(node)
    if isinstance(node, QueryableNode):
        return Queryable(node, label)
    return Opaque(node, label)


class PropertyInspector:
    """Issues the scalar and identity queries for each node.

    Per-field failures come back as FAILED slots. A provider exception is
    turned into a QueryFault on the node's inspection and never propagates.
    """

    def __init__(
        self,
        scalar_request: AttributeRequest = SCALAR_REQUEST,
        identity_request: AttributeRequest = IDENTITY_REQUEST,
    ) -> None:
        self.scalar_request = scalar_request
        self.identity_request = identity_request

    def query_attributes(self, node: QueryableNode, request: AttributeRequest) -> AttributeResult:
        """Run one batched query and return exactly one slot per requested field.

        Exceptions raised by the provider propagate to the caller.
        """
        fields = list(request.fields)
        if request.kind == "scalar":
            raw = list(node.query_scalar(fields))
        else:
            raw = list(node.query_identity(fields))
        if len(raw) != len(fields):
            logger.warning(
                f"Provider answered {len(raw)} slots for {len(fields)} {request.kind} fields"
            )
        slots = [_to_field_result(name, raw[i] if i < len(raw) else None) for i, name in enumerate(fields)]
        return AttributeResult(request=request, slots=slots)

    def inspect(self, node: Any, cancellation: CancellationToken | None = None) -> NodeInspection:
        capability = classify(node)
        if isinstance(capability, Opaque):
            return NodeInspection(label=capability.label, queryable=False)

        inspection = NodeInspection(label=capability.label, queryable=True)
        try:
            inspection.scalar = self.query_attributes(capability.handle, self.scalar_request)
            if cancellation is not None and cancellation.is_cancelled:
                inspection.cancelled = True
                return inspection
            inspection.identity = self.query_attributes(capability.handle, self.identity_request)
        except Exception as exc:
            inspection.fault = QueryFault(capability.label, exc)
            logger.error(f"Query fault on project '{capability.label}': {inspection.fault.message}")
        return inspection


def _to_field_result(name: str, raw: Any) -> FieldResult:
    if raw is None:
        return FieldResult(field=name, status=FieldStatus.FAILED, reason="missing")
    try:
        value, status = raw
    except (TypeError, ValueError):
        return FieldResult(field=name, status=FieldStatus.FAILED, reason="malformed")
    if status == HostStatus.OK:
        return FieldResult(field=name, status=FieldStatus.OK, value=value)
    return FieldResult(field=name, status=FieldStatus.FAILED, reason=str(getattr(status, "value", status)))


__all__ = ["Opaque", "PropertyInspector", "Queryable", "classify", "node_label"]
