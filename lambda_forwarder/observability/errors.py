# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from enum import Enum
from typing import ClassVar, Optional

from lambda_forwarder.util.app_env_utils import AppEnvError

# raised only while the process initializes, never from an invocation
ConfigurationError = AppEnvError


class ErrorCode(str, Enum):
    CREDENTIAL_UNAVAILABLE = "CredentialUnavailable"
    MALFORMED_CREDENTIAL = "MalformedCredential"
    UNSUPPORTED_EVENT_TYPE = "UnsupportedEventType"
    MISSING_STREAM_IDENTIFIER = "MissingStreamIdentifier"
    EMPTY_OBJECT_BODY = "EmptyObjectBody"
    UPSTREAM_DELIVERY_FAILURE = "UpstreamDeliveryFailure"


class ForwarderError(Exception):
    """Base class for errors that fail a single invocation"""

    error_code: ClassVar[ErrorCode]


class CredentialUnavailable(ForwarderError):
    error_code = ErrorCode.CREDENTIAL_UNAVAILABLE


class MalformedCredential(ForwarderError):
    error_code = ErrorCode.MALFORMED_CREDENTIAL


class UnsupportedEventType(ForwarderError):
    error_code = ErrorCode.UNSUPPORTED_EVENT_TYPE


class MissingStreamIdentifier(ForwarderError):
    error_code = ErrorCode.MISSING_STREAM_IDENTIFIER


class EmptyObjectBody(ForwarderError):
    error_code = ErrorCode.EMPTY_OBJECT_BODY


class UpstreamDeliveryFailure(ForwarderError):
    """
    The ingestion API answered with a non-2xx status or could not be reached.

    The exception message is the raw upstream response body so that it is what the
    Lambda runtime reports as the invocation error.
    """

    error_code = ErrorCode.UPSTREAM_DELIVERY_FAILURE

    def __init__(self, body: str, status: Optional[int] = None) -> None:
        super().__init__(body)
        self.body = body
        self.status = status
