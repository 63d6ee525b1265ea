# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import gzip
import io
from collections.abc import Mapping
from functools import cache
from typing import TYPE_CHECKING, Any, Final, Optional
from urllib.parse import unquote_plus

from lambda_forwarder.boto_retry import get_client_with_standard_retry
from lambda_forwarder.observability.errors import EmptyObjectBody
from lambda_forwarder.observability.powertools_logging import powertools_logger
from lambda_forwarder.sources.base import LogSource, is_comment
from lambda_forwarder.streaming.line_stream import LineStream

if TYPE_CHECKING:
    from botocore.response import StreamingBody
    from mypy_boto3_s3 import S3Client
else:
    S3Client = object
    StreamingBody = object

logger: Final = powertools_logger()

AWS_LOGS_PREFIX: Final = "AWSLogs/"


@cache
def default_s3_client() -> S3Client:
    client: S3Client = get_client_with_standard_retry("s3")
    return client


def stream_id_for_object(bucket: str, key: str) -> str:
    """
    Objects written by AWS log delivery live under `[prefix/]AWSLogs/...`. The bucket
    name addresses the stream, qualified with the delivery prefix when there is one.
    """
    if key.startswith(AWS_LOGS_PREFIX):
        return bucket
    prefix = key.split(f"/{AWS_LOGS_PREFIX}")[0]
    return f"{bucket}/{prefix}"


class S3ObjectSource(LogSource):
    """
    A gzip compressed, line oriented S3 object named by an S3 event notification.

    Objects can be arbitrarily large so the body is decompressed and split into lines
    incrementally while it is read.
    """

    def __init__(
        self, event: Mapping[str, Any], s3_client: Optional[S3Client] = None
    ) -> None:
        s3_record = event["Records"][0]["s3"]
        self._bucket: str = s3_record["bucket"]["name"]
        self._raw_key: str = s3_record["object"]["key"]
        self._s3 = s3_client if s3_client is not None else default_s3_client()
        self._body: Optional[StreamingBody] = None

    @classmethod
    def is_handling_event(cls, event: Mapping[str, Any]) -> bool:
        records = event.get("Records")
        if not isinstance(records, list) or not records:
            return False
        record = records[0]
        if not isinstance(record, Mapping):
            return False
        s3_record = record.get("s3")
        if not isinstance(s3_record, Mapping):
            return False
        bucket = s3_record.get("bucket")
        s3_object = s3_record.get("object")
        return (
            isinstance(bucket, Mapping)
            and isinstance(bucket.get("name"), str)
            and isinstance(s3_object, Mapping)
            and isinstance(s3_object.get("key"), str)
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def key(self) -> str:
        # keys in event notifications are url encoded with "+" for spaces
        return unquote_plus(self._raw_key)

    @property
    def stream_id(self) -> str:
        return stream_id_for_object(self._bucket, self._raw_key)

    def open(self) -> None:
        logger.info(f"S3 bucket: {self._bucket}", extra={"key": self.key})
        response = self._s3.get_object(Bucket=self._bucket, Key=self.key)
        body = response.get("Body")
        if body is None or response.get("ContentLength") == 0:
            if body is not None:
                body.close()
            raise EmptyObjectBody(f"no body in S3 object s3://{self._bucket}/{self.key}")
        self._body = body

    def write_lines(self, stream: LineStream) -> None:
        if self._body is None:
            self.open()
        body = self._body
        assert body is not None

        try:
            with gzip.GzipFile(fileobj=body, mode="rb") as decompressed, io.TextIOWrapper(
                decompressed, encoding="utf-8", errors="replace", newline=None
            ) as lines:
                for line in lines:
                    if line.endswith("\n"):
                        line = line[:-1]
                    if is_comment(line):
                        continue
                    stream.push(f"{line}\n".encode("utf-8"))
        finally:
            body.close()
            self._body = None
