"""Project info core: enumerate host projects, query their attributes, report them."""

from .context import CancellationToken, CoordinatingContext
from .driver import ProjectInfoPackage, ProjectInfoPass
from .enumerator import END, Cursor, NodeEnumerator
from .errors import (
    EnumerationError,
    FieldUnsupported,
    PassCancelled,
    ProjectInfoError,
    QueryFault,
    SinkUnavailable,
)
from .inspector import Opaque, PropertyInspector, Queryable, classify
from .models import (
    IDENTITY_REQUEST,
    SCALAR_REQUEST,
    AttributeRequest,
    AttributeResult,
    FieldResult,
    FieldStatus,
    NodeInspection,
    PassSummary,
    ProjectField,
    ReportSettings,
    coerce_settings,
)
from .report_writer import ReportWriter, format_report

__all__ = [
    "AttributeRequest",
    "AttributeResult",
    "CancellationToken",
    "CoordinatingContext",
    "Cursor",
    "END",
    "EnumerationError",
    "FieldResult",
    "FieldStatus",
    "FieldUnsupported",
    "IDENTITY_REQUEST",
    "NodeEnumerator",
    "NodeInspection",
    "Opaque",
    "PassCancelled",
    "PassSummary",
    "ProjectField",
    "ProjectInfoError",
    "ProjectInfoPackage",
    "ProjectInfoPass",
    "PropertyInspector",
    "Queryable",
    "QueryFault",
    "ReportSettings",
    "ReportWriter",
    "SCALAR_REQUEST",
    "SinkUnavailable",
    "classify",
    "coerce_settings",
    "format_report",
]
