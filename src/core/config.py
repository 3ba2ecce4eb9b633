"""
설정 로드: default.yaml + .env

우선순위 (낮음 → 높음):
1. DEFAULT_CONFIG (코드 기본값)
2. default.yaml (또는 --config 로 지정한 파일)
3. 환경변수 (.env 포함)
"""

import copy
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv

from src.domain.constants import (
    DEFAULT_PACKAGE_MANAGER,
    DEFAULT_TEMPLATE,
    DOCS_DEFAULT_STARTER,
    DOCS_NAMESPACE,
    DOCS_REPO,
    EXAMPLES_REPO,
    LOCKS_DIRNAME,
)

# 환경변수 이름
ENV_AUTH_TOKEN = "CREATE_PROJECT_AUTH"
ENV_LOCKS_DIR = "CREATE_PROJECT_LOCKS_DIR"

DEFAULT_CONFIG: dict[str, Any] = {
    "templates": {
        "default": DEFAULT_TEMPLATE,
        "docs_namespace": DOCS_NAMESPACE,
        "docs_repo": DOCS_REPO,
        "default_starter": DOCS_DEFAULT_STARTER,
        "examples_repo": EXAMPLES_REPO,
    },
    "package_manager": {
        "default": DEFAULT_PACKAGE_MANAGER,
    },
    "fetch": {
        "timeout": 30.0,
        "max_retries": 2,
        "auth_token": None,
    },
    "paths": {
        "locks_dir": None,  # None → 시스템 임시 디렉터리
    },
    "provision": {
        "lock_timeout": 10.0,
    },
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """중첩 dict 병합 (override 우선)."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def default_config_path() -> Path:
    """패키지에 포함된 default.yaml (src/core/default.yaml)."""
    return Path(__file__).parent / "default.yaml"


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    설정 로드.

    파일이 없으면 기본값만 사용 (에러 아님).

    Args:
        config_path: YAML 설정 파일 경로 (None이면 default.yaml)

    Returns:
        병합된 설정 dict
    """
    if config_path is None:
        config_path = default_config_path()

    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        config = _deep_merge(config, data)

    load_dotenv(find_dotenv(usecwd=True))

    auth_token = os.environ.get(ENV_AUTH_TOKEN)
    if auth_token:
        config["fetch"]["auth_token"] = auth_token

    locks_dir = os.environ.get(ENV_LOCKS_DIR)
    if locks_dir:
        config["paths"]["locks_dir"] = locks_dir

    return config


def get_locks_dir(config: dict[str, Any]) -> Path:
    """락 파일 디렉터리 (프로젝트 디렉터리 밖)."""
    locks_dir = config.get("paths", {}).get("locks_dir")
    if locks_dir:
        return Path(locks_dir)
    return Path(tempfile.gettempdir()) / LOCKS_DIRNAME
