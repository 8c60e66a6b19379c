"""
Validation of a raw environment against the variable table.

**Conceptual**: `validate` walks every `VariableSpec` in declaration order,
coerces the matching raw string (or applies the default), and collects every
violation it finds. It never stops at the first problem: the operator should
be able to fix a broken deployment in one pass instead of restarting once per
typo.

**Outcome** is all-or-nothing:
  - Every check passed: a read-only `ParsedEnvironment` mapping each variable
    name to its typed value.
  - Any check failed: `ConfigurationValidationError` carrying the full,
    ordered tuple of `ValidationIssue`s. No partial result is returned.

**Teaching note**: Validation is a pure function of its input. It reads only
the mapping it is handed (not `os.environ`), so tests can pass plain dicts
and the process environment is never touched.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Sequence

from src.config.variables import (
    VARIABLE_SPECS,
    OptionalWithDefault,
    Required,
    VariableSpec,
)

logger = logging.getLogger(__name__)

MISSING_REQUIRED_MESSAGE = "missing required variable"

# Typed values keyed by variable name. Read-only view; see validate().
ParsedEnvironment = Mapping[str, Any]


@dataclass(frozen=True)
class ValidationIssue:
    """
    One violation found during validation.

    Attributes:
        path: Variable name (or derived field path) the issue refers to.
        message: What is wrong, phrased for a human operator.
    """
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class ConfigurationValidationError(Exception):
    """
    Raised when the environment does not satisfy the variable table.

    **Conceptual**: This is the only error the configuration core raises for
    bad input. It carries every issue found, in declaration order, and its
    message lists them one per line. There is no recovery path: the bootstrap
    sequence must treat it as fatal and refuse to serve traffic.
    """

    def __init__(self, issues: Sequence[ValidationIssue]):
        self.issues = tuple(issues)
        if not self.issues:
            raise ValueError("ConfigurationValidationError requires at least one issue")
        lines = "\n".join(str(issue) for issue in self.issues)
        super().__init__(f"Environment validation failed:\n{lines}")

    @property
    def paths(self):
        return tuple(issue.path for issue in self.issues)


def _resolve(spec: VariableSpec, raw_value: Optional[str]):
    """
    Resolve one variable. Returns (value, issue); exactly one is meaningful.
    """
    if raw_value is None:
        if isinstance(spec.presence, Required):
            return None, ValidationIssue(spec.name, MISSING_REQUIRED_MESSAGE)
        if isinstance(spec.presence, OptionalWithDefault):
            value = spec.presence.value
        else:
            return None, None
    else:
        try:
            value = spec.kind.coerce(raw_value)
        except ValueError as e:
            return None, ValidationIssue(spec.name, str(e))

    if spec.transform is not None:
        value = spec.transform(value)
    return value, None


def collect_issues(
    raw: Mapping[str, Optional[str]],
    specs: Iterable[VariableSpec] = VARIABLE_SPECS,
) -> tuple:
    """
    Check `raw` against `specs` without raising.

    Returns:
        (values, issues): the resolved values dict and the ordered tuple of
        issues. `values` is only meaningful when `issues` is empty.
    """
    values = {}
    issues = []
    for spec in specs:
        value, issue = _resolve(spec, raw.get(spec.name))
        if issue is not None:
            issues.append(issue)
        else:
            values[spec.name] = value
    return values, tuple(issues)


def validate(
    raw: Mapping[str, Optional[str]],
    specs: Iterable[VariableSpec] = VARIABLE_SPECS,
) -> ParsedEnvironment:
    """
    Validate and coerce a raw environment.

    Args:
        raw: Mapping of variable name to raw string. Missing keys and None
             values both mean "not set". Unrecognized keys are ignored.
        specs: Ordered variable table (defaults to VARIABLE_SPECS).

    Returns:
        Read-only mapping of every declared variable name to its typed value
        (None for optional variables without a default that were not set).

    Raises:
        ConfigurationValidationError: If any variable is missing, malformed,
            or outside its enum options. All issues are reported together.
    """
    specs = tuple(specs)
    values, issues = collect_issues(raw, specs)
    logger.debug("Checked %d environment variables, %d issue(s)", len(specs), len(issues))

    if issues:
        raise ConfigurationValidationError(issues)

    return MappingProxyType(values)
