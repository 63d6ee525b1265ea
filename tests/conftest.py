# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Iterator
from os import environ
from typing import TYPE_CHECKING
from unittest.mock import patch

import boto3
from moto import mock_aws
from pytest import fixture

from tests import DEFAULT_REGION
from tests.test_utils.fake_http import FakePoolManager
from tests.test_utils.mock_forwarder_environment import MockForwarderEnv

if TYPE_CHECKING:
    from mypy_boto3_s3.client import S3Client
    from mypy_boto3_secretsmanager.client import SecretsManagerClient
    from mypy_boto3_ssm.client import SSMClient
else:
    S3Client = object
    SecretsManagerClient = object
    SSMClient = object

LOG_BUCKET = "my-log-bucket"


@fixture(autouse=True)
def aws_credentials() -> Iterator[None]:
    creds = {
        "AWS_ACCESS_KEY_ID": "testing",
        "AWS_SECRET_ACCESS_KEY": "testing",
        "AWS_SECURITY_TOKEN": "testing",
        "AWS_SESSION_TOKEN": "testing",
        "AWS_DEFAULT_REGION": DEFAULT_REGION,
    }
    with patch.dict(environ, creds, clear=True):
        yield


@fixture
def moto_backend() -> Iterator[None]:
    with mock_aws():
        yield


@fixture
def ssm_client(moto_backend: None) -> SSMClient:
    client: SSMClient = boto3.client("ssm")
    return client


@fixture
def secretsmanager_client(moto_backend: None) -> SecretsManagerClient:
    client: SecretsManagerClient = boto3.client("secretsmanager")
    return client


@fixture
def s3_client(moto_backend: None) -> S3Client:
    client: S3Client = boto3.client("s3")
    return client


@fixture
def log_bucket(s3_client: S3Client) -> str:
    s3_client.create_bucket(Bucket=LOG_BUCKET)
    return LOG_BUCKET


@fixture
def forwarder_env() -> MockForwarderEnv:
    return MockForwarderEnv()


@fixture
def fake_http() -> FakePoolManager:
    return FakePoolManager(status=200, data=b'{"status":"ok"}')
