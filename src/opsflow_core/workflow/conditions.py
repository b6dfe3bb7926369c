"""Condition evaluation for conditional workflow branches."""

import json
import logging
import math
from collections.abc import Callable
from datetime import datetime
from typing import Any

from opsflow_core.template.paths import get_nested_value
from opsflow_core.types import ConditionOperator

from .types import ConditionConfig

logger = logging.getLogger(__name__)

OPERATOR_LABELS: dict[ConditionOperator, str] = {
    ConditionOperator.EQUALS: "equals",
    ConditionOperator.NOT_EQUALS: "does not equal",
    ConditionOperator.CONTAINS: "contains",
    ConditionOperator.NOT_CONTAINS: "does not contain",
    ConditionOperator.STARTS_WITH: "starts with",
    ConditionOperator.ENDS_WITH: "ends with",
    ConditionOperator.GT: "is greater than",
    ConditionOperator.GTE: "is greater than or equal to",
    ConditionOperator.LT: "is less than",
    ConditionOperator.LTE: "is less than or equal to",
    ConditionOperator.IS_EMPTY: "is empty",
    ConditionOperator.IS_NOT_EMPTY: "is not empty",
    ConditionOperator.IN: "is one of",
    ConditionOperator.NOT_IN: "is not one of",
}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_number(value: Any) -> float | None:
    if _is_number(value):
        return None if math.isnan(value) else float(value)
    if isinstance(value, str) and value.strip():
        try:
            number = float(value)
        except ValueError:
            return None
        return None if math.isnan(number) else number
    return None


def _to_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        return parsed
    return None


def _is_equal(actual: Any, expected: Any) -> bool:
    if actual is None:
        return expected is None

    if isinstance(actual, bool) == isinstance(expected, bool) and actual == expected:
        return True

    if _is_number(actual) and isinstance(expected, str):
        return actual == _to_number(expected)
    if isinstance(actual, str) and _is_number(expected):
        return _to_number(actual) == expected

    if isinstance(actual, bool):
        if expected in ("true", "false"):
            return actual == (expected == "true")
        return False

    if isinstance(actual, str) and isinstance(expected, str):
        return actual.lower() == expected.lower()

    return False


def _contains(actual: Any, expected: Any) -> bool:
    if isinstance(actual, str) and isinstance(expected, str):
        return expected.lower() in actual.lower()
    if isinstance(actual, list):
        return any(_is_equal(item, expected) for item in actual)
    return False


def _starts_with(actual: Any, expected: Any) -> bool:
    if isinstance(actual, str) and isinstance(expected, str):
        return actual.lower().startswith(expected.lower())
    return False


def _ends_with(actual: Any, expected: Any) -> bool:
    if isinstance(actual, str) and isinstance(expected, str):
        return actual.lower().endswith(expected.lower())
    return False


def _compare(actual: Any, expected: Any) -> int | None:
    """Order two values: numbers first, then ISO dates, then plain strings."""
    left_num, right_num = _to_number(actual), _to_number(expected)
    if left_num is not None and right_num is not None:
        return (left_num > right_num) - (left_num < right_num)

    left_date, right_date = _to_datetime(actual), _to_datetime(expected)
    if left_date is not None and right_date is not None:
        try:
            return (left_date > right_date) - (left_date < right_date)
        except TypeError:
            # Naive vs aware timestamps
            return None

    if isinstance(actual, str) and isinstance(expected, str):
        return (actual > expected) - (actual < expected)
    return None


def _greater_than(actual: Any, expected: Any) -> bool:
    return _compare(actual, expected) == 1


def _less_than(actual: Any, expected: Any) -> bool:
    return _compare(actual, expected) == -1


def _is_empty(actual: Any) -> bool:
    if actual is None:
        return True
    if isinstance(actual, str):
        return actual.strip() == ""
    if isinstance(actual, (list, tuple, dict)):
        return len(actual) == 0
    return False


def _is_in(actual: Any, expected: Any) -> bool:
    if not isinstance(expected, list):
        return False
    return any(_is_equal(actual, item) for item in expected)


_OPERATORS: dict[ConditionOperator, Callable[[Any, Any], bool]] = {
    ConditionOperator.EQUALS: _is_equal,
    ConditionOperator.NOT_EQUALS: lambda a, e: not _is_equal(a, e),
    ConditionOperator.CONTAINS: _contains,
    ConditionOperator.NOT_CONTAINS: lambda a, e: not _contains(a, e),
    ConditionOperator.STARTS_WITH: _starts_with,
    ConditionOperator.ENDS_WITH: _ends_with,
    ConditionOperator.GT: _greater_than,
    ConditionOperator.GTE: lambda a, e: _greater_than(a, e) or _is_equal(a, e),
    ConditionOperator.LT: _less_than,
    ConditionOperator.LTE: lambda a, e: _less_than(a, e) or _is_equal(a, e),
    ConditionOperator.IS_EMPTY: lambda a, e: _is_empty(a),
    ConditionOperator.IS_NOT_EMPTY: lambda a, e: not _is_empty(a),
    ConditionOperator.IN: _is_in,
    ConditionOperator.NOT_IN: lambda a, e: not _is_in(a, e),
}


def _as_condition(config: ConditionConfig | dict[str, Any]) -> tuple[str, Any, Any]:
    if isinstance(config, ConditionConfig):
        return config.field, config.operator, config.value
    return config.get("field", ""), config.get("operator"), config.get("value")


def evaluate_condition(
    config: ConditionConfig | dict[str, Any], context: dict[str, Any]
) -> bool:
    """Evaluate a condition against the workflow context.

    Args:
        config: Condition (field path, operator, expected value)
        context: Workflow context

    Returns:
        True if the condition holds. Unknown operators and evaluation
        errors yield False.
    """
    field_path, operator, expected = _as_condition(config)
    actual = get_nested_value(context, field_path)

    logger.debug(
        "Evaluating condition field=%s operator=%s expected=%r actual=%r",
        field_path,
        operator,
        expected,
        actual,
    )

    try:
        evaluate = _OPERATORS[ConditionOperator(operator)]
    except ValueError:
        logger.warning("Unknown condition operator: %s", operator)
        return False

    try:
        result = evaluate(actual, expected)
    except Exception as e:
        logger.error(
            "Condition evaluation failed field=%s operator=%s: %s", field_path, operator, e
        )
        return False

    logger.debug("Condition result: %s", result)
    return result


def evaluate_conditions(
    conditions: list[ConditionConfig | dict[str, Any]],
    context: dict[str, Any],
    logic: str = "and",
) -> bool:
    """Evaluate several conditions joined by ``and`` / ``or``.

    An empty list is True.
    """
    if not conditions:
        return True
    if logic == "and":
        return all(evaluate_condition(c, context) for c in conditions)
    return any(evaluate_condition(c, context) for c in conditions)


def describe_condition(config: ConditionConfig | dict[str, Any]) -> str:
    """Human-readable description, e.g. ``contact.lead_status equals "hot"``."""
    field_path, operator, expected = _as_condition(config)

    try:
        op = ConditionOperator(operator)
        label = OPERATOR_LABELS[op]
    except ValueError:
        op, label = None, str(operator)

    if op in (ConditionOperator.IS_EMPTY, ConditionOperator.IS_NOT_EMPTY):
        return f"{field_path} {label}"

    if isinstance(expected, list):
        value_text = "[" + ", ".join(str(item) for item in expected) + "]"
    else:
        value_text = json.dumps(expected, default=str)

    return f"{field_path} {label} {value_text}"
