# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import io
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from urllib3 import HTTPResponse
from urllib3.exceptions import HTTPError


@dataclass
class RecordedRequest:
    method: str
    url: str
    headers: dict[str, str]
    options: dict[str, Any]
    chunks: list[bytes] = field(default_factory=list)

    @property
    def body(self) -> bytes:
        return b"".join(self.chunks)

    @property
    def lines(self) -> list[bytes]:
        return self.body.splitlines(keepends=True)


class FakePoolManager:
    """
    Stands in for urllib3's PoolManager. Drains the streamed request body (or only the
    first `max_chunks` chunks of it) before answering with a canned response.
    """

    def __init__(
        self,
        status: int = 200,
        data: bytes = b"",
        max_chunks: Optional[int] = None,
        error: Optional[HTTPError] = None,
    ) -> None:
        self.status = status
        self.data = data
        self.max_chunks = max_chunks
        self.error = error
        self.requests: list[RecordedRequest] = []

    @property
    def last_request(self) -> RecordedRequest:
        return self.requests[-1]

    def request(
        self,
        method: str,
        url: str,
        body: Iterable[bytes] = (),
        headers: Optional[dict[str, str]] = None,
        **options: Any,
    ) -> HTTPResponse:
        recorded = RecordedRequest(
            method=method, url=url, headers=dict(headers or {}), options=options
        )
        self.requests.append(recorded)

        for chunk in body:
            recorded.chunks.append(chunk)
            if self.max_chunks is not None and len(recorded.chunks) >= self.max_chunks:
                break

        if self.error is not None:
            raise self.error
        return HTTPResponse(
            body=io.BytesIO(self.data), status=self.status, preload_content=True
        )
