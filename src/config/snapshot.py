"""
Immutable configuration snapshot handed to the rest of the API server.

**Conceptual**: The snapshot is a tree of frozen dataclasses, one per
namespace (server, cors, frontend, one per external service, cache, rate
limiting, feature flags, health check). Sequences are tuples. Nothing in the
tree can be reassigned after construction, so the snapshot can be shared by
any number of workers or threads without locking.

**Why frozen dataclasses?**
  - Assignment raises `dataclasses.FrozenInstanceError` at the point of
    misuse, including on nested sub-objects.
  - Value semantics: two snapshots built from the same input compare equal.
  - IDE autocomplete and type checking on every field.

**Lifecycle**: created exactly once at process start by
`src.config.derivation.derive`, passed explicitly to whatever needs it, and
dropped at process exit. There is no teardown and no module-level instance.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


# ============================================================================
# Server, CORS, frontend, security, storage
# ============================================================================

@dataclass(frozen=True)
class ServerConfig:
    """
    Attributes:
        environment: "development", "production" or "test".
        port: HTTP listen port.
        log_level: "error", "warn", "info" or "debug".
    """
    environment: str
    port: int
    log_level: str

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@dataclass(frozen=True)
class CorsConfig:
    origins: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FrontendConfig:
    url: str
    serve_static: bool


@dataclass(frozen=True)
class SecurityConfig:
    api_key: Optional[str]
    jwt_secret: str


@dataclass(frozen=True)
class StorageConfig:
    database_url: Optional[str] = None
    redis_url: Optional[str] = None


# ============================================================================
# External services
# ============================================================================

@dataclass(frozen=True)
class OpenAIConfig:
    api_key: Optional[str]
    base_url: str
    model: str
    max_tokens: int


@dataclass(frozen=True)
class AzureOpenAIConfig:
    """
    Azure OpenAI deployment settings.

    Usable only when both `api_key` and `endpoint` are set; see `is_configured`.
    """
    api_key: Optional[str]
    endpoint: Optional[str]
    deployment: str
    api_version: str
    model: str
    max_tokens: int

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.endpoint)


@dataclass(frozen=True)
class AnthropicConfig:
    api_key: Optional[str]
    base_url: str
    model: str
    max_tokens: int


@dataclass(frozen=True)
class AiConfig:
    openai: OpenAIConfig
    azure: AzureOpenAIConfig
    anthropic: AnthropicConfig


@dataclass(frozen=True)
class ServiceEndpointConfig:
    """Key, base URL and timeout for a plain REST integration."""
    api_key: Optional[str]
    base_url: str
    timeout_ms: int


@dataclass(frozen=True)
class CoinGeckoConfig:
    api_key: Optional[str]
    base_url: str
    pro_base_url: str
    timeout_ms: int


@dataclass(frozen=True)
class TrendsConfig:
    # Google Trends needs no key
    base_url: str
    timeout_ms: int


@dataclass(frozen=True)
class FarcasterFreeConfig:
    warpcast_url: str
    hub_url: str
    timeout_ms: int


@dataclass(frozen=True)
class SocialConfig:
    trends: TrendsConfig
    farcaster: ServiceEndpointConfig
    farcaster_free: FarcasterFreeConfig


# ============================================================================
# Cache, rate limiting, feature flags, API, health check
# ============================================================================

@dataclass(frozen=True)
class CacheTtlConfig:
    """
    Cache lifetimes in seconds.

    The tiers are independent settings. No short <= medium <= long ordering
    is enforced.
    """
    short: int
    medium: int
    long: int


@dataclass(frozen=True)
class CacheConfig:
    ttl: CacheTtlConfig
    max_entries: int = 1000


@dataclass(frozen=True)
class RateLimitConfig:
    window_ms: int
    max_requests: int
    skip_successful_requests: bool = False
    skip_failed_requests: bool = False


@dataclass(frozen=True)
class FeatureFlags:
    rate_limiting: bool
    logging: bool
    cors: bool
    compression: bool
    caching: bool = True


@dataclass(frozen=True)
class ApiConfig:
    timeout_ms: int
    max_request_size: str
    version: str = "v1"
    base_path: str = "/api"


@dataclass(frozen=True)
class HealthCheckConfig:
    interval_ms: int


# ============================================================================
# Snapshot
# ============================================================================

@dataclass(frozen=True)
class ConfigurationSnapshot:
    """
    Root of the validated, derived configuration.

    Build it with `src.config.settings.load_configuration()` at startup and
    pass it to the components that need it.
    """
    server: ServerConfig
    cors: CorsConfig
    frontend: FrontendConfig
    security: SecurityConfig
    ai: AiConfig
    qloo: ServiceEndpointConfig
    coingecko: CoinGeckoConfig
    opensea: ServiceEndpointConfig
    social: SocialConfig
    cache: CacheConfig
    rate_limit: RateLimitConfig
    feature_flags: FeatureFlags
    api: ApiConfig
    health_check: HealthCheckConfig
    storage: StorageConfig = field(default_factory=StorageConfig)
