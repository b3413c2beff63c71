"""
Cycletime — Central Config Loader (Pydantic Settings)

This module centralizes AWS credentials, the CloudWatch namespace and
logging config for timers and reporters.

Import from here instead of reading ENV directly.

Usage:

from cycletime.config import Settings
from cycletime.connectors import CloudWatchReporter

reporter = CloudWatchReporter(Settings(CYCLETIME_NAMESPACE="build-farm"))
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parent.parent
CONFIG_DIR = BASE_DIR / "configs"

DEFAULT_REGION = "eu-central-1"
NAMESPACE_PREFIX = "Cycletime/"


class Settings(BaseSettings):
    """
    Central configuration using Pydantic Settings (v2).
    Overrides order:
    1. Init kwargs (what `cycletime.create()` passes)
    2. Environment variables
    3. .env file (optional)
    4. Defaults below
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -----------------------------
    # AWS / CloudWatch
    # -----------------------------
    AWS_REGION: str = Field(DEFAULT_REGION, description="CloudWatch region")
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_ENDPOINT_URL: Optional[str] = Field(
        None, description="Custom endpoint for LocalStack/testing"
    )

    # -----------------------------
    # Metrics
    # -----------------------------
    CYCLETIME_NAMESPACE: str = Field("empty", description="Suffix of Cycletime/<ns>")

    # -----------------------------
    # Logging
    # -----------------------------
    LOG_LEVEL: str = "INFO"
    LOGGING_YAML: str = str(CONFIG_DIR / "logging.yaml")
    LOG_DIR: Optional[str] = None

    @property
    def full_namespace(self) -> str:
        return f"{NAMESPACE_PREFIX}{self.CYCLETIME_NAMESPACE}"

    def to_boto3_kwargs(self) -> Dict[str, Any]:
        """Build kwargs dict suitable for boto3/aioboto3 client creation."""
        kwargs: Dict[str, Any] = {"region_name": self.AWS_REGION or DEFAULT_REGION}
        if self.AWS_ACCESS_KEY_ID:
            kwargs["aws_access_key_id"] = self.AWS_ACCESS_KEY_ID
        if self.AWS_SECRET_ACCESS_KEY:
            kwargs["aws_secret_access_key"] = self.AWS_SECRET_ACCESS_KEY
        if self.AWS_ENDPOINT_URL:
            kwargs["endpoint_url"] = self.AWS_ENDPOINT_URL
        return kwargs

    # ------------------------------------------------------------------
    # YAML Loader Utilities
    # ------------------------------------------------------------------

    def load_yaml(self, path: str) -> Dict[str, Any]:
        """Load a YAML file (logging config)."""
        if not Path(path).exists():
            raise FileNotFoundError(f"YAML not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)


# Create global settings instance
settings = Settings()

__all__ = ["Settings", "settings", "DEFAULT_REGION", "NAMESPACE_PREFIX"]
