# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import base64

from pytest import mark, raises

from lambda_forwarder.auth.identity import (
    decode_token_payload,
    org_id_from_access_token,
)
from lambda_forwarder.observability.errors import MalformedCredential
from tests.test_utils.tokens import make_access_token


def test_org_id_is_subject_after_fixed_offset() -> None:
    payload = base64.b64encode(b'{"sub":"XXXXorg123"}').decode()
    assert org_id_from_access_token(f"aaa.{payload}.ccc") == "org123"


def test_org_id_from_url_safe_unpadded_payload() -> None:
    token = make_access_token({"sub": "org_5f1d0c9e-aa??", "exp": 1})
    assert org_id_from_access_token(token) == "5f1d0c9e-aa??"


def test_two_segments_are_enough() -> None:
    payload = base64.b64encode(b'{"sub":"org_abc"}').decode()
    assert org_id_from_access_token(f"header.{payload}") == "abc"


def test_short_subject_yields_empty_org_id() -> None:
    assert org_id_from_access_token(make_access_token(sub="abc")) == ""


def test_signature_is_not_verified() -> None:
    token = make_access_token(sub="org_abc")
    tampered = token.rsplit(".", 1)[0] + ".not-a-signature"
    assert org_id_from_access_token(tampered) == "abc"


@mark.parametrize(
    "token",
    [
        "no-dots-at-all",
        "",
        "header..signature",
        "header.!!!!.signature",
        "header.a.signature",
        f"header.{base64.b64encode(b'not json').decode()}.signature",
        f"header.{base64.b64encode(bytes([0xff, 0xfe])).decode()}.signature",
    ],
)
def test_undecodable_tokens_are_malformed(token: str) -> None:
    with raises(MalformedCredential):
        org_id_from_access_token(token)


@mark.parametrize(
    "claims", [{"iss": "impart"}, {"sub": 42}, ["sub"], "XXXXorg123"]
)
def test_payload_without_string_subject_is_malformed(claims: object) -> None:
    with raises(MalformedCredential):
        org_id_from_access_token(make_access_token(claims))


def test_decode_token_payload_returns_claims() -> None:
    assert decode_token_payload(make_access_token({"sub": "x", "n": 1})) == {
        "sub": "x",
        "n": 1,
    }
