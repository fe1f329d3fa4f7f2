# ABOUTME: Re-exports trace contracts, the trace context, and the traced scope resolver.
# ABOUTME: Keeps a stable import location for code that records discovery diagnostics.

from discovery_harness.tracing.contracts import (
    LOG_TYPES,
    DiscoveryDiagnostics,
    OperatorEvaluation,
    ScopeEvaluation,
    TraceLogEntry,
)
from discovery_harness.tracing.scope_tracing import (
    ScopeResolution,
    ScopeResolver,
    TracedScopeResolver,
    create_traced_scope_resolver,
)
from discovery_harness.tracing.trace_context import TraceContext

__all__ = [
    "LOG_TYPES",
    "DiscoveryDiagnostics",
    "OperatorEvaluation",
    "ScopeEvaluation",
    "ScopeResolution",
    "ScopeResolver",
    "TraceContext",
    "TraceLogEntry",
    "TracedScopeResolver",
    "create_traced_scope_resolver",
]
