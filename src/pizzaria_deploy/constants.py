"""Constants for pizzaria-deploy."""

from pathlib import Path

DEFAULT_CONFIG_PATH = Path("/etc/pizzaria-deploy/config.toml")
CONFIG_ENV_VAR = "PIZZARIA_DEPLOY_CONFIG"

# Subprocess timeouts (seconds) for local queries and housekeeping. Network
# transfers (git clone/fetch/pull, apt-get) and image builds have none.
GIT_QUERY_TIMEOUT = 60
SYSTEMCTL_TIMEOUT = 60
CRONTAB_TIMEOUT = 30
DOCKER_QUERY_TIMEOUT = 30
INIT_TOOL_CHECK_TIMEOUT = 10

STATS_MAX_LINES = 5
SHORT_SHA_LENGTH = 7
