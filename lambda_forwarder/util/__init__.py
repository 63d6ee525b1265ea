# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from os import environ

from botocore.config import Config as _Config


def get_boto_config() -> _Config:
    """Returns a boto3 config with standard retries and `user_agent_extra` when one is configured"""
    return _Config(
        retries={"max_attempts": 5, "mode": "standard"},
        user_agent_extra=environ.get("USER_AGENT_EXTRA"),
    )
