"""AWS STS implementation of the credential broker blueprint."""

from __future__ import annotations

from typing import NoReturn

import boto3
from botocore.exceptions import ClientError

from zonelink.base.iam import CredentialBrokerBlueprint
from zonelink.base.exceptions import CredentialError, RoleAccessDeniedError
from zonelink.base.config import AWSConfig
from zonelink.base.logger import zl_logger
from zonelink.base.models import Credentials

_ERROR_MAP: dict[str, type[CredentialError]] = {
    "AccessDenied": RoleAccessDeniedError,
}


def _handle(e: ClientError, msg: str) -> NoReturn:
    exc = _ERROR_MAP.get(e.response["Error"]["Code"])
    raise (exc or CredentialError)(f"{msg}: {e}") from e


class CredentialBroker(CredentialBrokerBlueprint):
    """AWS STS role assumption.

    Attributes:
        client: boto3 STS client.
    """

    def __init__(self, config: AWSConfig) -> None:
        self.client = boto3.client("sts", **config.client_kwargs())

    def assume_role(self, role_arn: str, session_name: str) -> Credentials:
        """Assume a member-account role.

        Returns:
            The session's temporary credentials.

        Raises:
            RoleAccessDeniedError: If the trust policy rejects the caller.
            CredentialError: On any other STS failure.
        """
        params = {"RoleArn": role_arn, "RoleSessionName": session_name}
        try:
            zl_logger.debug("assume_role params %s", params, operation="assume_role")
            resp = self.client.assume_role(**params)
        except ClientError as e:
            _handle(e, f"Failed to assume role '{role_arn}'")
        creds = resp["Credentials"]
        zl_logger.debug(
            "assume_role issued key %s expiring %s",
            creds["AccessKeyId"], creds.get("Expiration"),
            operation="assume_role",
        )
        return Credentials(
            access_key_id=creds["AccessKeyId"],
            secret_access_key=creds["SecretAccessKey"],
            session_token=creds["SessionToken"],
            expiration=creds.get("Expiration"),
        )
