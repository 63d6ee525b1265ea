# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import base64
import binascii
import json
from typing import Any

from lambda_forwarder.observability.errors import MalformedCredential

# the issuer prefixes the organization id with a fixed 4 character tag
SUBJECT_ORG_ID_OFFSET = 4


def decode_token_payload(access_token: str) -> Any:
    """
    Decode the claims segment of a compact token without verifying its signature.

    Both the standard and the url-safe base64 alphabets are accepted and padding is
    optional.
    """
    segments = access_token.split(".")
    if len(segments) < 2 or not segments[1]:
        raise MalformedCredential("invalid access token value")

    encoded = segments[1].replace("-", "+").replace("_", "/").rstrip("=")
    encoded += "=" * (-len(encoded) % 4)
    try:
        return json.loads(base64.b64decode(encoded))
    except (binascii.Error, ValueError) as err:
        raise MalformedCredential(f"invalid access token payload: {err}") from err


def org_id_from_access_token(access_token: str) -> str:
    claims = decode_token_payload(access_token)
    subject = claims.get("sub") if isinstance(claims, dict) else None
    if not isinstance(subject, str):
        raise MalformedCredential("access token payload has no subject")
    return subject[SUBJECT_ORG_ID_OFFSET:]
