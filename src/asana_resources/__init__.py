"""asana_resources package exports."""

from .client import (
    DEFAULT_BASE_URL,
    AsanaClient,
    AsanaClientError,
    AsanaHTTPError,
    AsanaModelValidationError,
    AsanaParseError,
    RetryConfig,
)
from .collection import Collection, ItemType
from .config import create_client_from_env, load_env_config
from .logging import LogfmtFormatter, setup_logging
from .params import MissingParameterError, compact, require
from .parser import Page, parse_page, parse_single
from .resource import ABSENT, Resource
from .resources import (
    CustomField,
    CustomFieldSetting,
    Portfolio,
    Project,
    ProjectMembership,
    User,
    Workspace,
)

__all__ = [
    # Client
    "AsanaClient",
    "RetryConfig",
    "DEFAULT_BASE_URL",
    # Exceptions
    "AsanaClientError",
    "AsanaHTTPError",
    "AsanaParseError",
    "AsanaModelValidationError",
    "MissingParameterError",
    # Materialization
    "ABSENT",
    "Resource",
    "Collection",
    "ItemType",
    "Page",
    "parse_single",
    "parse_page",
    "compact",
    "require",
    # Resources
    "Portfolio",
    "ProjectMembership",
    "CustomFieldSetting",
    "CustomField",
    "Project",
    "User",
    "Workspace",
    # Setup
    "create_client_from_env",
    "load_env_config",
    "setup_logging",
    "LogfmtFormatter",
]
