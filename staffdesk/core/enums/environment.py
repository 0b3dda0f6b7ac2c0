"""Application environment types.

Defines the runtime environments for staffdesk.
Used by Settings to determine environment-specific behavior (log rendering,
debug output).

Environments:
- DEVELOPMENT: Local development, human-readable logs
- TESTING: Automated test execution with isolated database
- CI: Continuous integration environment
- PRODUCTION: Production deployment
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
