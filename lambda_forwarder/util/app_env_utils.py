# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import Optional


class AppEnvError(RuntimeError):
    pass


def env_to_optional_str(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def env_to_positive_int(name: str, value: str) -> int:
    try:
        result = int(value)
    except ValueError:
        raise AppEnvError(f"invalid {name}: {value}")
    if result < 1:
        raise AppEnvError(f"invalid {name}: {value}")
    return result
