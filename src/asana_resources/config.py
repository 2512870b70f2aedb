from __future__ import annotations

import os
from typing import Tuple

from . import client as _client
from .client import DEFAULT_BASE_URL, AsanaClient


def load_env_config(*, use_dotenv: bool = True) -> Tuple[str, str]:
    """Load Asana base URL and access token from environment (optional .env)."""
    if use_dotenv:
        _client.load_dotenv()
    base_url = os.getenv("ASANA_BASE_URL", "").strip() or DEFAULT_BASE_URL
    access_token = os.getenv("ASANA_ACCESS_TOKEN", "").strip()
    return base_url, access_token


def create_client_from_env(**kwargs) -> AsanaClient:
    """Create an AsanaClient from environment variables."""
    base_url, access_token = load_env_config()
    if not access_token:
        raise ValueError("Missing ASANA_ACCESS_TOKEN in environment.")
    return AsanaClient(access_token=access_token, base_url=base_url, **kwargs)


__all__ = ["load_env_config", "create_client_from_env"]
