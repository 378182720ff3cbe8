"""Client configuration models.

``RetryConfig`` governs the retry policy, ``ClientOptions`` validates the
rest of the constructor arguments of ``WebClient``.
"""

from pydantic import BaseModel, Field, field_validator

# =============================================================================
# Constants
# =============================================================================

DEFAULT_MAX_REQUEST_CONCURRENCY = 3
DEFAULT_TIMEOUT = 30.0
DEFAULT_PAGE_SIZE = 200
DEFAULT_BASE_DELAY = 1.0
DEFAULT_MAX_DELAY = 30 * 60.0
DEFAULT_RETRY_STATUSES = frozenset(range(500, 600))

# =============================================================================
# Retry Configuration
# =============================================================================


class RetryConfig(BaseModel):
    """Backoff settings for transient failures.

    Fields:
        retries: Maximum retry attempts. None retries forever, 0 disables retrying.
        base_delay: Delay in seconds before the first retry.
        max_delay: Upper bound in seconds for any computed delay.
        factor: Exponential growth factor between attempts.
        randomize: Perturb delays by up to +/- ``jitter``.
        jitter: Randomization fraction (0.5 = +/-50%).
        retry_statuses: HTTP statuses that count as transient.
    """

    retries: int | None = Field(default=None, ge=0)
    base_delay: float = Field(default=DEFAULT_BASE_DELAY, ge=0)
    max_delay: float = Field(default=DEFAULT_MAX_DELAY, ge=0)
    factor: float = Field(default=2.0, ge=1)
    randomize: bool = True
    jitter: float = Field(default=0.5, ge=0, lt=1)
    retry_statuses: frozenset[int] = DEFAULT_RETRY_STATUSES

    model_config = {"frozen": True}


# Named presets, mirroring common API client defaults.
TEN_RETRIES_IN_ABOUT_THIRTY_MINUTES = RetryConfig(retries=10, factor=1.96)
FIVE_RETRIES_IN_FIVE_MINUTES = RetryConfig(retries=5, factor=3.86)
RAPID_RETRY_POLICY = RetryConfig(retries=3, base_delay=0.0, max_delay=1.0, randomize=False)

# =============================================================================
# Client Options
# =============================================================================


class ClientOptions(BaseModel):
    """Validated constructor options for ``WebClient``."""

    base_url: str
    max_request_concurrency: int = Field(default=DEFAULT_MAX_REQUEST_CONCURRENCY, gt=0)
    retry_config: RetryConfig = Field(default_factory=RetryConfig)
    reject_rate_limited_calls: bool = False
    timeout: float | None = Field(default=DEFAULT_TIMEOUT, gt=0)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)
    headers: dict[str, str] = Field(default_factory=dict)

    @field_validator("base_url")
    @classmethod
    def base_url_ends_with_slash(cls, v: str) -> str:
        if not v:
            raise ValueError("base_url must not be empty")
        return v if v.endswith("/") else v + "/"
