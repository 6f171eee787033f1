"""Core constants used across content store modules.

This module centralizes addressing defaults and configuration key names.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_BRANCH = "main"
DEFAULT_API_URL = "https://api.github.com"
ENV_PREFIX = "CONTENTSTORE_"
OWNER_KEY = "owner"
REPO_KEY = "repo"
TOKEN_KEY = "token"
BRANCH_KEY = "branch"
API_URL_KEY = "api_url"
REQUIRED_CONFIG_KEYS = (OWNER_KEY, REPO_KEY, TOKEN_KEY)
SETTINGS_KEYS = (OWNER_KEY, REPO_KEY, TOKEN_KEY, BRANCH_KEY, API_URL_KEY)
DEFAULT_SETTINGS_PATH = Path("~/.contentstore/settings.yaml")
JSON_INDENT = 2
CONTENT_ENCODING = "utf-8"
GITHUB_ACCEPT_HEADER = "application/vnd.github+json"
JSON_CONTENT_TYPE = "application/json"
HTTP_NOT_FOUND = 404
HTTP_CONFLICT = 409
HTTP_UNPROCESSABLE = 422
DEFAULT_MAX_ATTEMPTS = 1
