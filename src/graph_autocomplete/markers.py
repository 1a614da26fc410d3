from __future__ import annotations
from typing import Iterable, List, Optional, Sequence

from .models import Diagnostic, Marker

SEVERITIES = ("error", "warning", "info")
DEFAULT_SOURCE = "GraphYamlEditor"


def marker_from_diagnostic(diagnostic: Diagnostic, lines: Sequence[str]) -> Marker:
    """Clamp a diagnostic's range into the document so the host can render it."""
    max_line = max(1, len(lines))
    start_line = max(1, min(max_line, diagnostic.line_number or 1))
    end_line = max(start_line, min(max_line, diagnostic.end_line_number or start_line))
    line_text = lines[start_line - 1] if lines else ""

    start_column = max(1, diagnostic.column or 1)
    min_end = max(2, start_column + 1)
    end_column = max(min_end, min(len(line_text) + 1, diagnostic.end_column or min_end))

    severity = diagnostic.severity if diagnostic.severity in SEVERITIES else "error"
    return Marker(
        severity=severity,
        message=diagnostic.message,
        source=diagnostic.source or DEFAULT_SOURCE,
        start_line_number=start_line,
        start_column=start_column,
        end_line_number=end_line,
        end_column=end_column,
    )


def build_markers(
    lines: Sequence[str],
    diagnostics: Iterable[Diagnostic] = (),
    schema_error: Optional[str] = None,
) -> List[Marker]:
    # a schema-level error hides every per-line diagnostic
    if schema_error:
        return [Marker("error", schema_error, "schema", 1, 1, 1, 2)]
    return [marker_from_diagnostic(d, lines) for d in diagnostics or ()]


def diagnostic_from_mapping(obj: dict) -> Diagnostic:
    """Accepts host JSON (camelCase or snake_case)."""
    def get(*names):
        for n in names:
            if obj.get(n) is not None:
                return obj[n]
        return None

    def as_int(value):
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    return Diagnostic(
        message=str(get("message") or ""),
        line_number=as_int(get("lineNumber", "line_number", "line")) or 1,
        column=as_int(get("column")) or 1,
        end_line_number=as_int(get("endLineNumber", "end_line_number")),
        end_column=as_int(get("endColumn", "end_column")),
        severity=str(get("severity") or "error"),
        source=get("source"),
    )
