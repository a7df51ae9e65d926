"""Pure-function rules engine pattern.

Rules are stateless functions: (entity, context) -> RuleResult.
No database, no side effects, no network calls. This makes them:
- Trivially testable (pure input/output)
- Composable (chain multiple rules)
- Auditable (deterministic, explainable)

Domain: checking merchant input (discount drafts, template saves) before any
external call or write happens.
"""

from dataclasses import dataclass, field
import math
from typing import Any, Iterable


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class RuleResult:
    """Outcome of a single rule evaluation."""

    passed: bool
    rule_name: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class RuleSetResult:
    """Aggregate outcome of multiple rules."""

    all_passed: bool
    results: list[RuleResult]
    failed: list[RuleResult] = field(default_factory=list)

    def __post_init__(self):
        self.failed = [r for r in self.results if not r.passed]
        self.all_passed = len(self.failed) == 0

    @property
    def first_failure(self) -> RuleResult | None:
        return self.failed[0] if self.failed else None


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def check_required_fields(
    data: dict,
    fields: Iterable[str],
    message: str | None = None,
) -> RuleResult:
    """Every named field must be present and non-blank.

    ``message`` replaces the generated text so callers can keep a fixed,
    user-facing wording.
    """
    missing = [name for name in fields if _is_blank(data.get(name))]
    passed = not missing

    return RuleResult(
        passed=passed,
        rule_name="required_fields",
        message=(
            "All required fields present"
            if passed
            else message or f"Missing required fields: {', '.join(missing)}"
        ),
        details={"missing": missing},
    )


def check_numeric_field(data: dict, name: str, minimum: float | None = None) -> RuleResult:
    """A field must parse as a finite number, optionally at or above ``minimum``."""
    raw = data.get(name)
    try:
        number = float(raw) if not isinstance(raw, bool) else None
    except (TypeError, ValueError):
        number = None
    if number is not None and not math.isfinite(number):
        number = None

    reasons = []
    if number is None:
        reasons.append(f"{name} must be a number")
    elif minimum is not None and number < minimum:
        reasons.append(f"{name} must be at least {minimum:g}")

    return RuleResult(
        passed=not reasons,
        rule_name="numeric_field",
        message=f"{name} is valid" if not reasons else "; ".join(reasons),
        details={"field": name, "value": raw, "parsed": number},
    )


def check_choice_field(data: dict, name: str, choices: Iterable[str]) -> RuleResult:
    """A field must be one of ``choices``."""
    allowed = tuple(choices)
    raw = data.get(name)
    passed = raw in allowed

    return RuleResult(
        passed=passed,
        rule_name="choice_field",
        message=(
            f"{name} is valid"
            if passed
            else f"{name} must be one of: {', '.join(allowed)}"
        ),
        details={"field": name, "value": raw, "choices": list(allowed)},
    )


# ---------------------------------------------------------------------------
# Rule composition
# ---------------------------------------------------------------------------

def evaluate_rules(*rules: RuleResult) -> RuleSetResult:
    """Compose multiple rule results into a single aggregate.

    Example::

        result = evaluate_rules(
            check_required_fields(form, ("title", "value")),
            check_numeric_field(form, "value", minimum=0),
        )
        if not result.all_passed:
            return result.first_failure.message
    """
    return RuleSetResult(
        all_passed=all(r.passed for r in rules),
        results=list(rules),
    )
