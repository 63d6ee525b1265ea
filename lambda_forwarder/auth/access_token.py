# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import TYPE_CHECKING, Callable, Final, Optional

from botocore.exceptions import BotoCoreError, ClientError

from lambda_forwarder.boto_retry import get_client_with_standard_retry
from lambda_forwarder.handler.environments.forwarder_environment import ForwarderEnv
from lambda_forwarder.observability.errors import CredentialUnavailable
from lambda_forwarder.observability.powertools_logging import powertools_logger

if TYPE_CHECKING:
    from mypy_boto3_secretsmanager import SecretsManagerClient
    from mypy_boto3_ssm import SSMClient
else:
    SecretsManagerClient = object
    SSMClient = object

logger: Final = powertools_logger()


def fetch_parameter(name: str) -> str:
    ssm: SSMClient = get_client_with_standard_retry("ssm")
    try:
        response = ssm.get_parameter(Name=name, WithDecryption=True)
    except (ClientError, BotoCoreError) as err:
        raise CredentialUnavailable(
            f"unable to read access token parameter {name}: {err}"
        ) from err

    value = response.get("Parameter", {}).get("Value")
    if not value:
        raise CredentialUnavailable("invalid parameter value")
    return value


def fetch_secret(name: str) -> str:
    secrets: SecretsManagerClient = get_client_with_standard_retry("secretsmanager")
    try:
        response = secrets.get_secret_value(SecretId=name)
    except (ClientError, BotoCoreError) as err:
        raise CredentialUnavailable(
            f"unable to read access token secret {name}: {err}"
        ) from err

    value = response.get("SecretString")
    if not value:
        raise CredentialUnavailable("invalid secret value")
    return value


class AccessTokenCache:
    """
    Holds the bearer token for the lifetime of the process.

    The token is fetched from SSM Parameter Store when a parameter name is configured,
    otherwise from Secrets Manager. A successful fetch is kept until the process is
    recycled; a failed fetch is not cached so the next invocation tries again.
    """

    def __init__(self, fetch: Callable[[], str]) -> None:
        self._fetch = fetch
        self._token: Optional[str] = None

    @classmethod
    def from_env(cls, env: ForwarderEnv) -> "AccessTokenCache":
        parameter_name = env.access_token_parameter_name
        if parameter_name:
            return cls(lambda: fetch_parameter(parameter_name))

        secret_name = env.access_token_secret_name
        if secret_name:
            return cls(lambda: fetch_secret(secret_name))

        # ForwarderEnv.from_env rejects this configuration
        raise ValueError("no access token source configured")

    @property
    def is_resolved(self) -> bool:
        return self._token is not None

    def resolve(self) -> str:
        if self._token is None:
            self._token = self._fetch()
            logger.info("access token resolved")
        return self._token
