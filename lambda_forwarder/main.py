# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import sys
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Final

from lambda_forwarder.auth.access_token import AccessTokenCache
from lambda_forwarder.handler.environments.forwarder_environment import ForwarderEnv
from lambda_forwarder.handler.forwarding_handler import ForwardingRequestHandler
from lambda_forwarder.observability.errors import (
    ConfigurationError,
    CredentialUnavailable,
    ForwarderError,
)
from lambda_forwarder.observability.powertools_logging import (
    powertools_logger,
    should_log_events,
)

if TYPE_CHECKING:
    from aws_lambda_powertools.utilities.typing import LambdaContext
else:
    LambdaContext = object

logger: Final = powertools_logger()


def initialize() -> tuple[ForwarderEnv, AccessTokenCache]:
    """
    Read the configuration and resolve the access token during the Lambda init phase.

    A missing access token source terminates the process before any event is accepted.
    A token that cannot be fetched yet is retried by the first invocation that needs it.
    """
    try:
        env = ForwarderEnv.from_env()
    except ConfigurationError as err:
        logger.error(str(err))
        sys.exit(1)

    access_tokens = AccessTokenCache.from_env(env)
    try:
        access_tokens.resolve()
    except CredentialUnavailable as err:
        logger.error(
            f"Unable to resolve access token: {err}",
            extra={"error_code": err.error_code.value},
        )
    return env, access_tokens


env, access_tokens = initialize()


@logger.inject_lambda_context(log_event=should_log_events(logger))
def lambda_handler(event: Mapping[str, Any], context: LambdaContext) -> str:
    handler = ForwardingRequestHandler(event, context, env, access_tokens)
    try:
        return handler.handle_request()
    except ForwarderError as err:
        logger.error(
            f"Invocation failed: {err}", extra={"error_code": err.error_code.value}
        )
        raise
