# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from os import environ
from typing import Optional

from lambda_forwarder.util.app_env_utils import (
    AppEnvError,
    env_to_optional_str,
    env_to_positive_int,
)

DEFAULT_API_BASE_URL = "https://api.impartsecurity.net/v0"
DEFAULT_LINE_BUFFER_SIZE = 1000


@dataclass(frozen=True)
class ForwarderEnv:
    api_base_url: str
    access_token_parameter_name: Optional[str]
    access_token_secret_name: Optional[str]
    logstream_id: Optional[str]
    line_buffer_size: int

    @classmethod
    def from_env(cls) -> "ForwarderEnv":
        parameter_name = env_to_optional_str(environ.get("ACCESS_TOKEN_PARAMETER_NAME"))
        secret_name = env_to_optional_str(environ.get("ACCESS_TOKEN_SECRET_NAME"))
        if not parameter_name and not secret_name:
            raise AppEnvError(
                "missing ACCESS_TOKEN_PARAMETER_NAME or ACCESS_TOKEN_SECRET_NAME env variable"
            )

        return ForwarderEnv(
            api_base_url=(
                env_to_optional_str(environ.get("API_BASE_URL")) or DEFAULT_API_BASE_URL
            ).rstrip("/"),
            access_token_parameter_name=parameter_name,
            access_token_secret_name=secret_name,
            logstream_id=env_to_optional_str(environ.get("LOGSTREAM_ID")),
            line_buffer_size=env_to_positive_int(
                "LINE_BUFFER_SIZE",
                environ.get("LINE_BUFFER_SIZE", str(DEFAULT_LINE_BUFFER_SIZE)),
            ),
        )
