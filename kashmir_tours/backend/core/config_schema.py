"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in application code.

Each top-level class corresponds to one file in config/settings/:
    ApplicationSchema  → application.yaml
    DatabaseSchema     → database.yaml
    LoggingSchema      → logging.yaml
    FeaturesSchema     → features.yaml
    SecuritySchema     → security.yaml
"""

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ServerSchema(_StrictBase):
    host: str
    port: int


class CorsSchema(_StrictBase):
    origins: list[str]


class PaginationSchema(_StrictBase):
    default_limit: int
    max_limit: int


class TimeoutsSchema(_StrictBase):
    database: int
    health_check: int


class BookingRulesSchema(_StrictBase):
    min_lead_days: int = Field(ge=0)
    max_advance_days: int = Field(ge=1)
    max_travelers_per_booking: int = Field(ge=1)
    cancellation_cutoff_hours: int = Field(ge=0)
    reference_prefix: str


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    api_prefix: str
    docs_enabled: bool
    server: ServerSchema
    cors: CorsSchema
    pagination: PaginationSchema
    timeouts: TimeoutsSchema
    booking: BookingRulesSchema


# =============================================================================
# database.yaml
# =============================================================================


class DatabaseSchema(_StrictBase):
    driver: str
    host: str
    port: int
    name: str
    user: str
    pool_size: int
    max_overflow: int
    pool_timeout: int
    pool_recycle: int
    echo: bool


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: str
    handlers: HandlersSchema


# =============================================================================
# features.yaml
# =============================================================================


class FeaturesSchema(_StrictBase):
    auth_rate_limit_enabled: bool
    auth_allow_registration: bool
    api_detailed_errors: bool
    reviews_enabled: bool
    security_startup_checks_enabled: bool


# =============================================================================
# security.yaml
# =============================================================================


class JwtSchema(_StrictBase):
    algorithm: str
    access_token_expire_minutes: int
    refresh_token_expire_days: int
    audience: str


class LoginRateLimitSchema(_StrictBase):
    attempts_per_minute: int
    attempts_per_hour: int


class RateLimitingSchema(_StrictBase):
    login: LoginRateLimitSchema


class SecretsValidationSchema(_StrictBase):
    jwt_secret_min_length: int


class CorsEnforcementSchema(_StrictBase):
    enforce_in_production: bool
    allow_methods: list[str]
    allow_headers: list[str]


class SecuritySchema(_StrictBase):
    jwt: JwtSchema
    rate_limiting: RateLimitingSchema
    secrets_validation: SecretsValidationSchema
    cors: CorsEnforcementSchema
