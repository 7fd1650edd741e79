"""
Pydantic configuration models for zonelink.

Validates AWS client configs, reconciler settings and the scheduled
invocation payload up front instead of passing bad values to boto3.
"""

from __future__ import annotations

import os
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, model_validator

from zonelink.base.models import Credentials


class AWSConfig(BaseModel):
    """Configuration for AWS service clients.

    Credentials are resolved in order:
    1. Explicit values passed in the config dict.
    2. Environment variables (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY,
       AWS_SESSION_TOKEN, AWS_DEFAULT_REGION).
    3. If neither is set, fields are left as None so boto3 can fall back to its
       own credential chain (instance metadata, ~/.aws/credentials, etc.).
    """

    model_config = ConfigDict(extra="forbid")

    aws_access_key_id: str | None = Field(default=None, description="AWS access key ID")
    aws_secret_access_key: str | None = Field(default=None, description="AWS secret access key")
    aws_session_token: str | None = Field(default=None, description="STS session token")
    region_name: str | None = Field(default=None, description="AWS region (e.g. 'us-east-1')")
    max_attempts: int | None = Field(
        default=None, ge=1, description="botocore retry attempts for each API call"
    )

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to environment variables for missing credentials."""
        env_map = {
            "aws_access_key_id": "AWS_ACCESS_KEY_ID",
            "aws_secret_access_key": "AWS_SECRET_ACCESS_KEY",
            "aws_session_token": "AWS_SESSION_TOKEN",
            "region_name": "AWS_DEFAULT_REGION",
        }
        for field, env_var in env_map.items():
            if not values.get(field):
                values[field] = os.environ.get(env_var)
        return values

    @classmethod
    def from_credentials(
        cls,
        credentials: Credentials,
        region: str,
        max_attempts: int | None = None,
    ) -> AWSConfig:
        """Build a config for assumed-role credentials.

        Bypasses the environment fallback so the member-account clients never
        pick up the owner account's ambient session. ``max_attempts`` carries
        the botocore retry setting over to the member clients.
        """
        return cls.model_construct(
            aws_access_key_id=credentials.access_key_id,
            aws_secret_access_key=credentials.secret_access_key,
            aws_session_token=credentials.session_token,
            region_name=region,
            max_attempts=max_attempts,
        )

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for :func:`boto3.client`."""
        kwargs: dict[str, Any] = {
            "aws_access_key_id": self.aws_access_key_id,
            "aws_secret_access_key": self.aws_secret_access_key,
            "aws_session_token": self.aws_session_token,
            "region_name": self.region_name,
        }
        if self.max_attempts is not None:
            from botocore.config import Config  # lazy import

            kwargs["config"] = Config(
                retries={"max_attempts": self.max_attempts, "mode": "standard"}
            )
        return kwargs


class ReconcilerSettings(BaseModel):
    """Fixed protocol constants for a reconciliation run.

    Values may be overridden through ``ZONELINK_*`` environment variables.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    tag_key: str = Field(
        default="route53zones",
        min_length=1,
        description="VPC tag whose value holds the zone filter list",
    )
    session_name: str = Field(
        default="route53-zone-association",
        min_length=2,
        max_length=64,
        description="RoleSessionName used for every role assumption",
    )
    zone_page_size: int = Field(default=100, ge=1, le=100)
    tag_batch_size: int = Field(default=10, ge=1, le=10)
    dry_run: bool = Field(default=False, description="Plan only, make no mutation calls")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to ``ZONELINK_*`` environment variables."""
        env_map = {
            "tag_key": "ZONELINK_TAG_KEY",
            "session_name": "ZONELINK_SESSION_NAME",
            "zone_page_size": "ZONELINK_ZONE_PAGE_SIZE",
            "tag_batch_size": "ZONELINK_TAG_BATCH_SIZE",
            "dry_run": "ZONELINK_DRY_RUN",
        }
        for field, env_var in env_map.items():
            if values.get(field) is None and os.environ.get(env_var):
                values[field] = os.environ[env_var]
        return values


class RunInput(BaseModel):
    """Payload delivered by the scheduler for one run."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    role_arn: str = Field(alias="roleArn", min_length=1)
    region: str = Field(min_length=1)


__all__ = [
    "AWSConfig",
    "ReconcilerSettings",
    "RunInput",
]
