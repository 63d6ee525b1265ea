# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import base64
import gzip
import json
from collections.abc import Mapping
from typing import Any, Final, TypedDict

from lambda_forwarder.observability.powertools_logging import powertools_logger
from lambda_forwarder.sources.base import LogSource, is_comment, terminate_line
from lambda_forwarder.streaming.line_stream import LineStream

logger: Final = powertools_logger()


class LogEvent(TypedDict):
    message: str


class LogBatch(TypedDict):
    owner: str
    logGroup: str
    logEvents: list[LogEvent]


def decode_log_batch(data: str) -> LogBatch:
    compressed_payload = base64.b64decode(data)
    uncompressed_payload = gzip.decompress(compressed_payload)
    log_batch: LogBatch = json.loads(uncompressed_payload)
    return log_batch


class CloudWatchLogsSource(LogSource):
    """
    A CloudWatch Logs subscription batch.

    The batch is small (bounded by the subscription filter's own limits) so it is
    decompressed and parsed in full up front.
    """

    def __init__(self, event: Mapping[str, Any]) -> None:
        self._batch = decode_log_batch(event["awslogs"]["data"])

    @classmethod
    def is_handling_event(cls, event: Mapping[str, Any]) -> bool:
        awslogs = event.get("awslogs")
        return isinstance(awslogs, Mapping) and isinstance(awslogs.get("data"), str)

    @property
    def stream_id(self) -> str:
        return f"{self._batch.get('owner', '')}:{self._batch.get('logGroup', '')}"

    def write_lines(self, stream: LineStream) -> None:
        logger.info(
            "forwarding awslogs batch",
            extra={
                "log_group": self._batch.get("logGroup"),
                "log_events": len(self._batch["logEvents"]),
            },
        )
        for log_event in self._batch["logEvents"]:
            message = log_event["message"]
            if is_comment(message):
                continue
            stream.push(terminate_line(message))
