# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from lambda_forwarder.streaming.line_stream import LineStream

COMMENT_PREFIX = "#"


def is_comment(line: str) -> bool:
    return line.startswith(COMMENT_PREFIX)


def terminate_line(line: str) -> bytes:
    if not line.endswith("\n"):
        line += "\n"
    return line.encode("utf-8")


class LogSource(ABC):
    """
    One supported upstream event shape.

    Implementations decode their event on construction, expose the stream id they
    derive from it, and push the newline terminated, non-comment lines they contain
    into a `LineStream`.
    """

    @classmethod
    @abstractmethod
    def is_handling_event(cls, event: Mapping[str, Any]) -> bool:
        pass

    @property
    @abstractmethod
    def stream_id(self) -> str:
        """stream id derived from the event, may be empty"""

    def open(self) -> None:
        """prepare the content for `write_lines`, before any line is requested"""

    @abstractmethod
    def write_lines(self, stream: LineStream) -> None:
        """push every forwarded line into the stream in source order"""
