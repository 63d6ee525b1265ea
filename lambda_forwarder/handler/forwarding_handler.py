# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping
from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, Final, Optional

from urllib3 import PoolManager

from lambda_forwarder.auth.access_token import AccessTokenCache
from lambda_forwarder.auth.identity import org_id_from_access_token
from lambda_forwarder.forwarding.logstream_client import DeliveryResult, LogstreamClient
from lambda_forwarder.handler.environments.forwarder_environment import ForwarderEnv
from lambda_forwarder.observability.errors import UpstreamDeliveryFailure
from lambda_forwarder.observability.powertools_logging import powertools_logger
from lambda_forwarder.sources import LogSource, classify_event, resolve_stream_id
from lambda_forwarder.streaming.line_stream import LineStream, StreamAbortedError

if TYPE_CHECKING:
    from aws_lambda_powertools.utilities.typing import LambdaContext
    from mypy_boto3_s3 import S3Client
else:
    LambdaContext = object
    S3Client = object

logger: Final = powertools_logger()

GENERIC_DELIVERY_FAILURE: Final = "upstream delivery failed"


class ForwardingRequestHandler:
    """
    Forwards the log lines carried by one Lambda event to the ingestion API.

    Everything that can reject the invocation without talking to the API (credential,
    event shape, stream id, object retrieval) is checked first. The request is then
    started before the first line is produced and the lines are streamed into it.
    """

    def __init__(
        self,
        event: Mapping[str, Any],
        context: LambdaContext,
        env: ForwarderEnv,
        access_tokens: AccessTokenCache,
        s3_client: Optional[S3Client] = None,
        pool_manager: Optional[PoolManager] = None,
    ) -> None:
        self._event = event
        self._context = context
        self._env = env
        self._access_tokens = access_tokens
        self._s3_client = s3_client
        self._pool_manager = pool_manager

    def handle_request(self) -> str:
        access_token = self._access_tokens.resolve()
        org_id = org_id_from_access_token(access_token)

        source = classify_event(self._event, self._s3_client)
        stream_id = resolve_stream_id(source, self._env.logstream_id)
        logger.info(
            f"Forwarding {type(source).__name__} event",
            extra={"org_id": org_id, "logstream_id": stream_id},
        )

        source.open()
        stream = LineStream(self._env.line_buffer_size)
        with LogstreamClient(
            self._env.api_base_url, access_token, self._pool_manager
        ) as client:
            delivery = client.start(org_id, stream_id, stream)
            self._produce(source, stream, delivery)
            result = self._settle(delivery)

        return self._report(result, stream.line_count)

    @staticmethod
    def _produce(
        source: LogSource, stream: LineStream, delivery: "Future[DeliveryResult]"
    ) -> None:
        try:
            source.write_lines(stream)
        except StreamAbortedError:
            # the request settled before every line was read, its result is reported
            return
        except Exception:
            stream.abort()
            delivery.exception()
            raise
        stream.close()

    @staticmethod
    def _settle(delivery: "Future[DeliveryResult]") -> DeliveryResult:
        try:
            return delivery.result()
        except Exception as err:
            return DeliveryResult(status=None, body=str(err))

    @staticmethod
    def _report(result: DeliveryResult, line_count: int) -> str:
        if result.succeeded:
            message = f"sent {line_count} lines for inspection"
            logger.info(message)
            return message

        logger.error(
            "Logstream delivery failed",
            extra={"status": result.status, "response": result.body},
        )
        raise UpstreamDeliveryFailure(
            result.body or GENERIC_DELIVERY_FAILURE, status=result.status
        )
