# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Final, Optional
from urllib.parse import quote

from lambda_forwarder.observability.errors import (
    MissingStreamIdentifier,
    UnsupportedEventType,
)
from lambda_forwarder.sources.base import LogSource
from lambda_forwarder.sources.cloudwatch_logs import CloudWatchLogsSource
from lambda_forwarder.sources.s3_object import S3ObjectSource

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client
else:
    S3Client = object

# characters encodeURIComponent leaves as they are, besides letters and digits
STREAM_ID_SAFE_CHARACTERS: Final = "-_.!~*'()"


def classify_event(
    event: Mapping[str, Any], s3_client: Optional[S3Client] = None
) -> LogSource:
    """
    Match the event against the supported sources, CloudWatch Logs first.
    Raises UnsupportedEventType when no source handles it.
    """
    if CloudWatchLogsSource.is_handling_event(event):
        return CloudWatchLogsSource(event)
    if S3ObjectSource.is_handling_event(event):
        return S3ObjectSource(event, s3_client)
    raise UnsupportedEventType("unsupported event type")


def resolve_stream_id(source: LogSource, override: Optional[str]) -> str:
    stream_id = override or source.stream_id
    if not stream_id:
        raise MissingStreamIdentifier("missing LOGSTREAM_ID env variable")
    return quote(stream_id, safe=STREAM_ID_SAFE_CHARACTERS)


__all__ = [
    "LogSource",
    "CloudWatchLogsSource",
    "S3ObjectSource",
    "classify_event",
    "resolve_stream_id",
]
