"""
Derivation of the nested configuration snapshot from validated values.

**Conceptual**: Validation produces a flat mapping of typed scalars. This
module shapes it into namespaces: it splits the comma-separated origins list,
applies built-in fallbacks, and groups the independent per-service variables
(key, endpoint, deployment...) into one record per external service, alongside
the constant base URLs, model ids and token limits the services need.

**Rules**:
  - Derivation is total for any environment that passed validation. Anything
    that could fail belongs in the validator, not here.
  - Derivation is pure and deterministic: the same input gives equal snapshots.
  - The three cache TTL tiers are copied through as-is; their relative
    ordering is not checked.
"""

from typing import Optional, Tuple

from src.config.snapshot import (
    AiConfig,
    AnthropicConfig,
    ApiConfig,
    AzureOpenAIConfig,
    CacheConfig,
    CacheTtlConfig,
    CoinGeckoConfig,
    ConfigurationSnapshot,
    CorsConfig,
    FarcasterFreeConfig,
    FeatureFlags,
    FrontendConfig,
    HealthCheckConfig,
    OpenAIConfig,
    RateLimitConfig,
    SecurityConfig,
    ServerConfig,
    ServiceEndpointConfig,
    SocialConfig,
    StorageConfig,
    TrendsConfig,
)
from src.config.validator import ParsedEnvironment

# Used when JWT_SECRET is not set. Safe for local development only.
DEFAULT_JWT_SECRET = "default-jwt-secret-change-in-production"

# Outbound HTTP timeout shared by the REST integrations (ms)
SERVICE_TIMEOUT_MS = 10000

CACHE_MAX_ENTRIES = 1000

OPENAI_BASE_URL = "https://api.openai.com/v1"
OPENAI_MODEL = "gpt-4-turbo-preview"
OPENAI_MAX_TOKENS = 4000

AZURE_OPENAI_MODEL = "o4-mini"
AZURE_OPENAI_MAX_TOKENS = 40000

ANTHROPIC_BASE_URL = "https://api.anthropic.com"
ANTHROPIC_MODEL = "claude-3-sonnet-20240229"
ANTHROPIC_MAX_TOKENS = 4000

COINGECKO_BASE_URL = "https://api.coingecko.com/api/v3"
COINGECKO_PRO_BASE_URL = "https://pro-api.coingecko.com/api/v3"
OPENSEA_BASE_URL = "https://api.opensea.io/api/v2"

GOOGLE_TRENDS_BASE_URL = "https://trends.google.com"
FARCASTER_BASE_URL = "https://api.neynar.com/v2"
WARPCAST_BASE_URL = "https://api.warpcast.com/v2"
FARCASTER_HUB_URL = "https://hub-api.neynar.com/v1"


def split_csv(value: str) -> Tuple[str, ...]:
    """
    Split a comma-separated string into a tuple of trimmed items.

    Only an empty source gives an empty tuple; blank items between or after
    commas are kept as "".

    >>> split_csv(" a, b ,c")
    ('a', 'b', 'c')
    >>> split_csv("a,,b")
    ('a', '', 'b')
    >>> split_csv("")
    ()
    """
    if value == "":
        return ()
    return tuple(item.strip() for item in value.split(","))


def with_fallback(value: Optional[str], fallback: str) -> str:
    """Return `value` unless it is None or empty, else `fallback`."""
    return value if value else fallback


def _build_ai(parsed: ParsedEnvironment) -> AiConfig:
    return AiConfig(
        openai=OpenAIConfig(
            api_key=parsed["OPENAI_API_KEY"],
            base_url=OPENAI_BASE_URL,
            model=OPENAI_MODEL,
            max_tokens=OPENAI_MAX_TOKENS,
        ),
        azure=AzureOpenAIConfig(
            api_key=parsed["AZURE_OPENAI_API_KEY"],
            endpoint=parsed["AZURE_OPENAI_ENDPOINT"],
            deployment=parsed["AZURE_OPENAI_DEPLOYMENT"],
            api_version=parsed["AZURE_OPENAI_API_VERSION"],
            model=AZURE_OPENAI_MODEL,
            max_tokens=AZURE_OPENAI_MAX_TOKENS,
        ),
        anthropic=AnthropicConfig(
            api_key=parsed["ANTHROPIC_API_KEY"],
            base_url=ANTHROPIC_BASE_URL,
            model=ANTHROPIC_MODEL,
            max_tokens=ANTHROPIC_MAX_TOKENS,
        ),
    )


def _build_social(parsed: ParsedEnvironment) -> SocialConfig:
    return SocialConfig(
        trends=TrendsConfig(
            base_url=GOOGLE_TRENDS_BASE_URL,
            timeout_ms=SERVICE_TIMEOUT_MS,
        ),
        farcaster=ServiceEndpointConfig(
            api_key=parsed["FARCASTER_API_KEY"],
            base_url=FARCASTER_BASE_URL,
            timeout_ms=SERVICE_TIMEOUT_MS,
        ),
        farcaster_free=FarcasterFreeConfig(
            warpcast_url=WARPCAST_BASE_URL,
            hub_url=FARCASTER_HUB_URL,
            timeout_ms=SERVICE_TIMEOUT_MS,
        ),
    )


def derive(parsed: ParsedEnvironment) -> ConfigurationSnapshot:
    """
    Build the configuration snapshot from a validated environment.

    **Conceptual**: Each namespace of the snapshot is assembled from one or
    more validated variables plus module constants. Grouping is purely a
    derivation concern: AZURE_OPENAI_API_KEY and AZURE_OPENAI_ENDPOINT are
    validated independently but end up side by side in `ai.azure`.

    Args:
        parsed: Output of `src.config.validator.validate`.

    Returns:
        Frozen ConfigurationSnapshot.
    """
    return ConfigurationSnapshot(
        server=ServerConfig(
            environment=parsed["NODE_ENV"],
            port=parsed["PORT"],
            log_level=parsed["LOG_LEVEL"],
        ),
        cors=CorsConfig(origins=split_csv(parsed["CORS_ORIGINS"])),
        frontend=FrontendConfig(
            url=parsed["FRONTEND_URL"],
            serve_static=parsed["SERVE_STATIC_FRONTEND"],
        ),
        security=SecurityConfig(
            api_key=parsed["API_KEY"],
            jwt_secret=with_fallback(parsed["JWT_SECRET"], DEFAULT_JWT_SECRET),
        ),
        storage=StorageConfig(
            database_url=parsed["DATABASE_URL"],
            redis_url=parsed["REDIS_URL"],
        ),
        ai=_build_ai(parsed),
        qloo=ServiceEndpointConfig(
            api_key=parsed["QLOO_API_KEY"],
            base_url=parsed["QLOO_API_URL"],
            timeout_ms=SERVICE_TIMEOUT_MS,
        ),
        coingecko=CoinGeckoConfig(
            api_key=parsed["COINGECKO_API_KEY"],
            base_url=COINGECKO_BASE_URL,
            pro_base_url=COINGECKO_PRO_BASE_URL,
            timeout_ms=SERVICE_TIMEOUT_MS,
        ),
        opensea=ServiceEndpointConfig(
            api_key=parsed["OPENSEA_API_KEY"],
            base_url=OPENSEA_BASE_URL,
            timeout_ms=SERVICE_TIMEOUT_MS,
        ),
        social=_build_social(parsed),
        cache=CacheConfig(
            ttl=CacheTtlConfig(
                short=parsed["CACHE_TTL_SHORT"],
                medium=parsed["CACHE_TTL_MEDIUM"],
                long=parsed["CACHE_TTL_LONG"],
            ),
            max_entries=CACHE_MAX_ENTRIES,
        ),
        rate_limit=RateLimitConfig(
            window_ms=parsed["RATE_LIMIT_WINDOW_MS"],
            max_requests=parsed["RATE_LIMIT_MAX_REQUESTS"],
            skip_successful_requests=False,
            skip_failed_requests=False,
        ),
        feature_flags=FeatureFlags(
            rate_limiting=parsed["ENABLE_RATE_LIMITING"],
            logging=parsed["ENABLE_LOGGING"],
            cors=parsed["ENABLE_CORS"],
            compression=parsed["ENABLE_COMPRESSION"],
            caching=True,
        ),
        api=ApiConfig(
            timeout_ms=parsed["REQUEST_TIMEOUT"],
            max_request_size=parsed["MAX_REQUEST_SIZE"],
        ),
        health_check=HealthCheckConfig(interval_ms=parsed["HEALTH_CHECK_INTERVAL"]),
    )
