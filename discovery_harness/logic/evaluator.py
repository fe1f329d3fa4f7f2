# ABOUTME: Evaluates JSON-Logic style rules used by action prerequisites and scope filters.
# ABOUTME: Records every operator application into an optional TraceContext for diagnostics.

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from discovery_harness.tracing.trace_context import TraceContext

if TYPE_CHECKING:
    from discovery_harness.discovery.entities import SimpleEntityManager


class UnknownOperatorError(RuntimeError):
    pass


_MISSING = object()

_COMPARISONS: dict[str, Callable[[Any, Any], bool]] = {
    "<": lambda left, right: left < right,
    "<=": lambda left, right: left <= right,
    ">": lambda left, right: left > right,
    ">=": lambda left, right: left >= right,
}


def _resolve_path(data: Any, path: str) -> Any:
    if path == "":
        return data
    current = data
    for part in str(path).split("."):
        if isinstance(current, dict):
            if part not in current:
                return _MISSING
            current = current[part]
        elif isinstance(current, (list, tuple)):
            try:
                current = current[int(part)]
            except (ValueError, IndexError):
                return _MISSING
        else:
            return _MISSING
    return current


def is_operation(rule: Any) -> bool:
    return isinstance(rule, dict) and len(rule) == 1 and isinstance(next(iter(rule)), str)


class LogicEvaluator:
    SUPPORTED_OPERATORS = frozenset(
        {"var", "==", "!=", "!", "and", "or", "in", "has_component", *_COMPARISONS}
    )

    def __init__(self, *, entity_manager: SimpleEntityManager | None = None) -> None:
        self._entity_manager = entity_manager

    def evaluate(
        self,
        rule: Any,
        data: dict[str, Any] | None = None,
        *,
        trace: TraceContext | None = None,
        entity_id: str | None = None,
    ) -> Any:
        context = data or {}
        if isinstance(rule, list):
            return [self.evaluate(item, context, trace=trace, entity_id=entity_id) for item in rule]
        if not is_operation(rule):
            return rule

        operator, raw_args = next(iter(rule.items()))
        if operator not in self.SUPPORTED_OPERATORS:
            raise UnknownOperatorError(f"Unknown logic operator: {operator}")

        if operator == "var":
            return self._evaluate_var(raw_args, context, trace=trace, entity_id=entity_id)

        args = raw_args if isinstance(raw_args, list) else [raw_args]
        reason: str | None = None

        if operator in {"and", "or"}:
            result = self._evaluate_junction(operator, args, context, trace=trace, entity_id=entity_id)
        elif operator == "!":
            result = not bool(self.evaluate(args[0] if args else None, context, trace=trace, entity_id=entity_id))
        else:
            values = [self.evaluate(arg, context, trace=trace, entity_id=entity_id) for arg in args]
            if operator in {"==", "!="}:
                left, right = self._binary(operator, values)
                result = left == right if operator == "==" else left != right
            elif operator in _COMPARISONS:
                left, right = self._binary(operator, values)
                try:
                    result = _COMPARISONS[operator](left, right)
                except TypeError:
                    result = False
                    reason = f"incomparable operands: {type(left).__name__} and {type(right).__name__}"
            elif operator == "in":
                needle, haystack = self._binary(operator, values)
                try:
                    result = self._contains(haystack, needle)
                except TypeError:
                    result = False
                    reason = f"unhashable needle: {type(needle).__name__} in {type(haystack).__name__}"
            else:
                result, reason = self._has_component(values)

        if trace is not None:
            trace.capture_operator_evaluation(
                operator,
                result=result,
                entity_id=entity_id,
                reason=reason,
            )
        return result

    @staticmethod
    def _binary(operator: str, values: list[Any]) -> tuple[Any, Any]:
        if len(values) != 2:
            raise ValueError(f"Operator '{operator}' expects 2 arguments, got {len(values)}.")
        return values[0], values[1]

    @staticmethod
    def _contains(haystack: Any, needle: Any) -> bool:
        if isinstance(haystack, str):
            return isinstance(needle, str) and needle in haystack
        if isinstance(haystack, (list, tuple, set, dict)):
            return needle in haystack
        return False

    def _evaluate_var(
        self,
        raw_args: Any,
        context: dict[str, Any],
        *,
        trace: TraceContext | None,
        entity_id: str | None,
    ) -> Any:
        if isinstance(raw_args, list):
            path = raw_args[0] if raw_args else ""
            default = raw_args[1] if len(raw_args) > 1 else None
        else:
            path = raw_args
            default = None
        if is_operation(path):
            path = self.evaluate(path, context, trace=trace, entity_id=entity_id)
        value = _resolve_path(context, "" if path is None else str(path))
        resolved = value is not _MISSING
        result = value if resolved else default
        if trace is not None:
            trace.capture_operator_evaluation(
                "var",
                success=resolved,
                result=result,
                entity_id=entity_id,
                reason=None if resolved else f"path '{path}' not found",
                details={"path": path},
            )
        return result

    def _evaluate_junction(
        self,
        operator: str,
        args: list[Any],
        context: dict[str, Any],
        *,
        trace: TraceContext | None,
        entity_id: str | None,
    ) -> bool:
        for arg in args:
            value = bool(self.evaluate(arg, context, trace=trace, entity_id=entity_id))
            if operator == "and" and not value:
                return False
            if operator == "or" and value:
                return True
        return operator == "and"

    def _has_component(self, values: list[Any]) -> tuple[bool, str | None]:
        target, component_id = self._binary("has_component", values)
        if isinstance(target, dict):
            components = target.get("components")
            if isinstance(components, dict):
                return component_id in components, None
            target = target.get("id")
        if not isinstance(target, str) or not target:
            return False, "has_component target did not resolve to an entity"
        if self._entity_manager is None:
            return False, "no entity manager available for has_component"
        return self._entity_manager.has_component(target, str(component_id)), None
