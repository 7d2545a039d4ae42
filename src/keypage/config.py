"""
Configuration for keypage.

``PaginationConfig`` is the immutable profile the engine runs with.
``PaginationSettings`` loads one from ``KEYPAGE_*`` environment variables
(or a ``.env`` file) for applications that configure through the environment.
"""

from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from keypage.logging import LogFormat, LogLevel, configure_logging


@dataclass(frozen=True)
class PaginationConfig:
    """
    Pagination profile.

    Controls page size limits, the identifier field, which fields may be
    sorted on, and which fields the request-level filter predicates target.
    """

    # Page sizing
    page_size: int = 10
    max_page_size: int = 100

    # Record shape
    id_field: str = "id"
    allowed_sort_fields: tuple[str, ...] = ("id", "price")

    # Request-level filter predicates
    filter_field: str = "category"
    range_field: str = "price"

    # Run the two boundary probes concurrently
    parallel_boundary_checks: bool = False

    def __post_init__(self) -> None:
        if self.max_page_size < 1:
            raise ValueError("max_page_size must be at least 1")
        if not 1 <= self.page_size <= self.max_page_size:
            raise ValueError(
                f"page_size must be between 1 and {self.max_page_size}, got {self.page_size}"
            )

    @property
    def sort_fields(self) -> frozenset[str]:
        """Allowed sort fields, always including the identifier."""
        return frozenset(self.allowed_sort_fields) | {self.id_field}


DEFAULT_CONFIG = PaginationConfig()


class PaginationSettings(BaseSettings):
    """Environment-driven settings, e.g. ``KEYPAGE_PAGE_SIZE=25``."""

    model_config = SettingsConfigDict(
        env_prefix="KEYPAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    page_size: int = Field(default=10, ge=1, description="Default page size")
    max_page_size: int = Field(default=100, ge=1, description="Upper bound for pageSize")
    id_field: str = Field(default="id", description="Unique identifier field")
    allowed_sort_fields: list[str] = Field(
        default_factory=lambda: ["id", "price"],
        description="Fields clients may sort on",
    )
    filter_field: str = Field(default="category", description="Equality filter field")
    range_field: str = Field(default="price", description="Numeric range filter field")
    parallel_boundary_checks: bool = Field(
        default=False, description="Run hasNext/hasPrevious probes concurrently"
    )

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.JSON, description="json or text")

    def to_config(self) -> PaginationConfig:
        """Convert settings to a PaginationConfig."""
        return PaginationConfig(
            page_size=self.page_size,
            max_page_size=self.max_page_size,
            id_field=self.id_field,
            allowed_sort_fields=tuple(self.allowed_sort_fields),
            filter_field=self.filter_field,
            range_field=self.range_field,
            parallel_boundary_checks=self.parallel_boundary_checks,
        )

    def configure_logging(self) -> None:
        """Apply the logging level and format from these settings."""
        configure_logging(level=self.log_level, format=self.log_format)
