"""Environment lookups used by the settings modules."""

import os

from django.core.exceptions import ImproperlyConfigured


def get_env(var_name: str, default=None, required: bool = False):
    value = os.environ.get(var_name, default)
    if required and value in (None, ""):
        raise ImproperlyConfigured(f"Missing required environment variable: {var_name}")
    return value


def get_env_list(var_name: str, default: str = "") -> list[str]:
    raw = get_env(var_name, default) or ""
    return [item.strip() for item in raw.split(",") if item.strip()]


def get_env_int(var_name: str, default: int) -> int:
    value = get_env(var_name)
    if value in (None, ""):
        return default
    try:
        return int(value)
    except ValueError:
        raise ImproperlyConfigured(f"Environment variable {var_name} must be an integer")
