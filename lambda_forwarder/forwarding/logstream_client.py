# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from types import TracebackType
from typing import Final, Optional

from urllib3 import BaseHTTPResponse, PoolManager
from urllib3.exceptions import HTTPError

from lambda_forwarder.observability.powertools_logging import powertools_logger
from lambda_forwarder.streaming.line_stream import LineStream, StreamAbortedError

logger: Final = powertools_logger()

USER_AGENT: Final = "aws-lambda-forwarder"

http = PoolManager()


@dataclass(frozen=True)
class DeliveryResult:
    status: Optional[int]
    body: str

    @property
    def succeeded(self) -> bool:
        return self.status is not None and 200 <= self.status < 300


class LogstreamClient:
    """
    Streams log lines to the ingestion API's logstream endpoint.

    `start` sends the request on a worker thread so the caller can keep producing into
    the stream the request body is read from. Once the request settles, successfully
    or not, the stream is aborted so a producer blocked on a full stream is released.
    """

    def __init__(
        self,
        api_base_url: str,
        access_token: str,
        pool_manager: Optional[PoolManager] = None,
    ) -> None:
        self._api_base_url = api_base_url
        self._access_token = access_token
        self._http = pool_manager if pool_manager is not None else http
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="logstream-send"
        )

    def __enter__(self) -> "LogstreamClient":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self._executor.shutdown(wait=True)

    def url_for(self, org_id: str, stream_id: str) -> str:
        return f"{self._api_base_url}/orgs/{org_id}/logstream/{stream_id}"

    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._access_token}",
            "Content-Type": "application/octet-stream",
            "User-Agent": USER_AGENT,
        }

    def start(
        self, org_id: str, stream_id: str, stream: LineStream
    ) -> "Future[DeliveryResult]":
        return self._executor.submit(self.send, org_id, stream_id, stream)

    def send(self, org_id: str, stream_id: str, stream: LineStream) -> DeliveryResult:
        url = self.url_for(org_id, stream_id)
        logger.debug(f"Sending logstream to {url}")
        try:
            response: BaseHTTPResponse = self._http.request(
                "POST",
                url,
                body=stream,
                headers=self.headers(),
                chunked=True,
                retries=False,
            )
            result = DeliveryResult(
                status=response.status,
                body=(response.data or b"").decode("utf-8", errors="replace"),
            )
        except StreamAbortedError:
            result = DeliveryResult(status=None, body="line stream aborted")
        except HTTPError as err:
            result = DeliveryResult(status=None, body=str(err))
        finally:
            stream.abort()

        logger.debug(f"Logstream request settled, status code is {result.status}")
        return result
