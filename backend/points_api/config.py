"""
Points API — Application Configuration
========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types, and provides a singleton `settings` object.
Who:   Imported by the store layer, the Lambda entry points and the ASGI app.
When:  Loaded once at module import time (Lambda cold start / server start).
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every setting has a default suitable for local development against
    DynamoDB Local; deployments override the table name and region.
    """

    # ── DynamoDB ──────────────────────────────────────────────────────────
    # What: Table holding one item per user, partition key "userId" (S)
    # The table is provisioned outside this service.
    points_table_name: str = Field(default="PointsTable", min_length=3, max_length=255)

    aws_region: str = Field(default="us-east-1")

    # What: Override endpoint, e.g. http://localhost:8001 for DynamoDB Local
    # Unset in AWS, where boto3 resolves the regional endpoint itself.
    dynamodb_endpoint_url: Optional[str] = Field(default=None)

    # What: Insert with a conditional put (attribute_not_exists) instead of
    #       the plain overwrite that follows the existence check.
    # false restores the non-atomic check-then-put sequence.
    conditional_writes: bool = Field(default=True)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("dynamodb_endpoint_url")
    @classmethod
    def blank_endpoint_is_unset(cls, v: Optional[str]) -> Optional[str]:
        """An empty DYNAMODB_ENDPOINT_URL means "use the AWS endpoint"."""
        if v is not None and not v.strip():
            return None
        return v

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Singleton instance, imported throughout the application
settings = Settings()
