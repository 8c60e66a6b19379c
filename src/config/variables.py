"""
Declarative table of every environment variable the API server recognizes.

**Conceptual**: This module is the single source of truth for configuration
inputs. Each variable is described by a `VariableSpec`: its name, its kind
(how the raw string is coerced), whether it must be present, its default, and
an optional transform applied after coercion. The validator only interprets
this table; adding or changing a setting is a change here, never in the
validator.

**Kinds**:
  - `StringKind`: no coercion.
  - `EnumKind`: exact, case-sensitive match against a fixed set of options.
  - `IntegerKind`: strict base-10 integer (no whitespace, no rounding).
  - `BooleanKind`: True iff the raw string is exactly "true".
  - `DurationMsKind`: integer milliseconds, no unit suffixes.

**Presence** is a tagged choice rather than a pair of flags:
  - `Required()`: absence is a validation error.
  - `OptionalWithDefault(value)`: absence yields `value`.
  - `OptionalNoDefault()`: absence yields None.

**Teaching note**: Keeping "optional with default" and "optional without
default" as two distinct types avoids the classic "was it unset or was it the
default?" ambiguity. The default is a typed value, checked against its kind
when the table is built, so a typo like `default="8OOO"` on an integer
variable fails at import time instead of at 3am in production.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, Optional, Protocol, Tuple, TypeVar, Union

T = TypeVar("T")

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


# ============================================================================
# Kinds
# ============================================================================

class VariableKind(Protocol[T]):
    """
    Protocol for how a raw environment string becomes a typed value.

    **Conceptual**: A kind is any object with a `label`, a `coerce` method
    (raise ValueError with a readable message on bad input) and an `accepts`
    method (used to check declared defaults). The kinds below subclass it
    explicitly for readability; structural matches work too.
    """

    label: str

    def coerce(self, raw: str) -> T:
        ...

    def accepts(self, value: Any) -> bool:
        ...


class StringKind(VariableKind[str]):
    label = "string"

    def coerce(self, raw: str) -> str:
        return raw

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str)


@dataclass(frozen=True)
class EnumKind(VariableKind[str]):
    """String restricted to a fixed set of options (case-sensitive)."""

    values: Tuple[str, ...]
    label = "enum"

    def __post_init__(self):
        if not self.values:
            raise ValueError("EnumKind requires at least one option")

    def coerce(self, raw: str) -> str:
        if raw not in self.values:
            options = ", ".join(f"'{v}'" for v in self.values)
            raise ValueError(f"expected one of {options}; got '{raw}'")
        return raw

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str) and value in self.values


class IntegerKind(VariableKind[int]):
    label = "integer"

    def coerce(self, raw: str) -> int:
        if not _INTEGER_PATTERN.fullmatch(raw):
            raise ValueError(f"expected a base-10 integer, got '{raw}'")
        return int(raw)

    def accepts(self, value: Any) -> bool:
        # bool is a subclass of int; a flag is never a valid integer default
        return isinstance(value, int) and not isinstance(value, bool)


class DurationMsKind(IntegerKind):
    """Integer milliseconds. Unit suffixes ("30s", "5m") are rejected."""

    label = "duration-ms"

    def coerce(self, raw: str) -> int:
        if not _INTEGER_PATTERN.fullmatch(raw):
            raise ValueError(f"expected a duration in milliseconds, got '{raw}'")
        return int(raw)


class BooleanKind(VariableKind[bool]):
    """
    Flag kind. Only the exact literal "true" is True.

    "TRUE", "1", "yes" and "" are all False. This is deliberate and must not be
    loosened into case-insensitive truthy parsing.
    """

    label = "boolean"

    def coerce(self, raw: str) -> bool:
        return raw == "true"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, bool)


STRING = StringKind()
INTEGER = IntegerKind()
BOOLEAN = BooleanKind()
DURATION_MS = DurationMsKind()


# ============================================================================
# Presence
# ============================================================================

@dataclass(frozen=True)
class Required:
    pass


@dataclass(frozen=True)
class OptionalWithDefault:
    value: Any


@dataclass(frozen=True)
class OptionalNoDefault:
    pass


Presence = Union[Required, OptionalWithDefault, OptionalNoDefault]


# ============================================================================
# Variable spec
# ============================================================================

@dataclass(frozen=True)
class VariableSpec(Generic[T]):
    """
    Declaration of one recognized environment variable.

    Attributes:
        name: Environment variable name (unique within a table).
        kind: Descriptor used to coerce the raw string.
        presence: Required / OptionalWithDefault / OptionalNoDefault.
        transform: Optional pure function applied after coercion (and to the
                   default), e.g. `str.strip`.
        description: Human-readable note, shown by the environment check action.
    """
    name: str
    kind: VariableKind[T]
    presence: Presence = field(default_factory=OptionalNoDefault)
    transform: Optional[Callable[[T], T]] = None
    description: str = ""

    def __post_init__(self):
        """Validate the declaration itself (not an environment value)."""
        if not self.name:
            raise ValueError("VariableSpec.name must be a non-empty string")
        if isinstance(self.presence, OptionalWithDefault):
            if not self.kind.accepts(self.presence.value):
                raise ValueError(
                    f"Default for {self.name} must be a valid {self.kind.label}, "
                    f"got: {self.presence.value!r}"
                )

    @property
    def required(self) -> bool:
        return isinstance(self.presence, Required)

    @property
    def has_default(self) -> bool:
        return isinstance(self.presence, OptionalWithDefault)


def build_spec_table(specs: Iterable[VariableSpec]) -> Tuple[VariableSpec, ...]:
    """Freeze `specs` into an ordered tuple, rejecting duplicate names."""
    table = tuple(specs)
    seen = set()
    for spec in table:
        if spec.name in seen:
            raise ValueError(f"Duplicate variable declared: {spec.name}")
        seen.add(spec.name)
    return table


def _strip(value: str) -> str:
    return value.strip()


def _default(value: Any) -> OptionalWithDefault:
    return OptionalWithDefault(value)


# Declaration order is the order in which validation issues are reported.
VARIABLE_SPECS: Tuple[VariableSpec, ...] = build_spec_table([
    # Server
    VariableSpec("NODE_ENV", EnumKind(("development", "production", "test")),
                 _default("development"), description="Runtime environment mode"),
    VariableSpec("PORT", INTEGER, _default(8000), description="HTTP listen port"),
    VariableSpec("CORS_ORIGINS", STRING, _default("http://localhost:3000"),
                 description="Comma-separated list of allowed origins"),
    VariableSpec("FRONTEND_URL", STRING, _default("http://localhost:3000"), _strip,
                 description="Public URL of the web frontend"),
    VariableSpec("API_KEY", STRING, description="Key clients must present"),
    VariableSpec("DATABASE_URL", STRING, transform=_strip),
    VariableSpec("REDIS_URL", STRING, transform=_strip),
    VariableSpec("JWT_SECRET", STRING,
                 description="Token signing secret (falls back to a development value)"),
    VariableSpec("LOG_LEVEL", EnumKind(("error", "warn", "info", "debug")), _default("info")),

    # AI/LLM services
    VariableSpec("OPENAI_API_KEY", STRING),
    VariableSpec("ANTHROPIC_API_KEY", STRING),
    VariableSpec("AZURE_OPENAI_API_KEY", STRING),
    VariableSpec("AZURE_OPENAI_ENDPOINT", STRING, transform=_strip),
    VariableSpec("AZURE_OPENAI_DEPLOYMENT", STRING, _default("o4-mini")),
    VariableSpec("AZURE_OPENAI_API_VERSION", STRING, _default("2025-01-01-preview")),

    # Qloo taste AI
    VariableSpec("QLOO_API_KEY", STRING),
    VariableSpec("QLOO_API_URL", STRING, _default("https://api.qloo.com"), _strip),

    # Crypto/NFT and social APIs
    VariableSpec("COINGECKO_API_KEY", STRING),
    VariableSpec("OPENSEA_API_KEY", STRING),
    VariableSpec("FARCASTER_API_KEY", STRING),

    # Cache tiers, in seconds
    VariableSpec("CACHE_TTL_SHORT", INTEGER, _default(300)),
    VariableSpec("CACHE_TTL_MEDIUM", INTEGER, _default(1800)),
    VariableSpec("CACHE_TTL_LONG", INTEGER, _default(3600)),

    # Rate limiting
    VariableSpec("RATE_LIMIT_WINDOW_MS", DURATION_MS, _default(900000)),
    VariableSpec("RATE_LIMIT_MAX_REQUESTS", INTEGER, _default(100)),

    # Feature flags
    VariableSpec("ENABLE_RATE_LIMITING", BOOLEAN, _default(True)),
    VariableSpec("ENABLE_LOGGING", BOOLEAN, _default(True)),
    VariableSpec("ENABLE_CORS", BOOLEAN, _default(True)),
    VariableSpec("ENABLE_COMPRESSION", BOOLEAN, _default(False)),
    VariableSpec("SERVE_STATIC_FRONTEND", BOOLEAN, _default(False)),

    # Request handling
    VariableSpec("MAX_REQUEST_SIZE", STRING, _default("10mb")),
    VariableSpec("REQUEST_TIMEOUT", DURATION_MS, _default(30000)),

    # Health check
    VariableSpec("HEALTH_CHECK_INTERVAL", DURATION_MS, _default(30000)),
])


def spec_names(specs: Iterable[VariableSpec] = VARIABLE_SPECS) -> Tuple[str, ...]:
    """Return variable names in declaration order."""
    return tuple(spec.name for spec in specs)
