import logging
import os
from typing import Any, List, Optional, Tuple, Union

from slimaws import constants
from slimaws.constants import FALSE_STRINGS, LOG_LEVELS, TRACE_LOG_LEVELS, TRUE_STRINGS

LOG = logging.getLogger(__name__)


def eval_log_type(env_var_name: str) -> Union[str, bool]:
    """Get the log type from environment variable"""
    log_type = os.environ.get(env_var_name, "").lower().strip()
    return log_type if log_type in LOG_LEVELS else False


def parse_boolean_env(env_var_name: str) -> Optional[bool]:
    """Parse the value of the given env variable and return True/False, or None if it is not a boolean value."""
    value = os.environ.get(env_var_name, "").lower().strip()
    if value in TRUE_STRINGS:
        return True
    if value in FALSE_STRINGS:
        return False
    return None


def is_env_true(env_var_name: str) -> bool:
    """Whether the given environment variable has a truthy value."""
    return os.environ.get(env_var_name, "").lower().strip() in TRUE_STRINGS


def is_env_not_false(env_var_name: str) -> bool:
    """Whether the given environment variable is empty or has a truthy value."""
    return os.environ.get(env_var_name, "").lower().strip() not in FALSE_STRINGS


def load_environment(profiles: str = None, env=os.environ) -> List[str]:
    """Loads the environment variables from ~/.slimaws/{profile}.env, for each profile listed in the profiles.
    :param env: environment to load profile to. Defaults to `os.environ`
    :param profiles: a comma separated list of profiles to load (defaults to "default")
    :returns str: the list of the actually loaded profiles (might be the fallback)
    """
    if not profiles:
        profiles = "default"

    profiles = [profile.strip() for profile in profiles.split(",")]
    environment = {}
    import dotenv

    for profile in profiles:
        path = os.path.join(CONFIG_DIR, f"{profile}.env")
        if not os.path.exists(path):
            continue
        environment.update(dotenv.dotenv_values(path))

    for k, v in environment.items():
        # we do not want to override the environment
        if k not in env and v is not None:
            env[k] = v

    return profiles


def is_trace_logging_enabled() -> bool:
    if SLIMAWS_LOG:
        return SLIMAWS_LOG.lower() in TRACE_LOG_LEVELS
    return False


def get_default_region() -> str:
    """Returns the region clients use when none is given, following the precedence of the AWS CLI."""
    return (
        os.environ.get("AWS_REGION", "").strip()
        or os.environ.get("AWS_DEFAULT_REGION", "").strip()
        or constants.DEFAULT_REGION
    )


# the configuration profile to load
CONFIG_PROFILE = os.environ.get("CONFIG_PROFILE", "").strip()

# host configuration directory
CONFIG_DIR = os.environ.get("CONFIG_DIR", os.path.expanduser("~/.slimaws"))

# keep this on top to populate environment
LOADED_PROFILES = load_environment(CONFIG_PROFILE)

# default encoding used for strings on the wire
DEFAULT_ENCODING = "utf-8"

# whether to enable verbose debug logging
SLIMAWS_LOG = eval_log_type("SLIMAWS_LOG")
DEBUG = is_env_true("DEBUG") or SLIMAWS_LOG in TRACE_LOG_LEVELS

# region used by clients that are created without an explicit region
DEFAULT_REGION = get_default_region()

# endpoint override for all clients, f.e. http://localhost:4566 to target a localstack instance
ENDPOINT_URL = os.environ.get("AWS_ENDPOINT_URL", "").strip() or None

# whether requests are sent unsigned, even if credentials are available
DISABLE_SIGNING = is_env_true("SLIMAWS_DISABLE_SIGNING")

# list of configuration values derived from the environment.
# Make sure to keep this in sync with the above!
CONFIG_KEYS = [
    "CONFIG_DIR",
    "CONFIG_PROFILE",
    "DEBUG",
    "DEFAULT_REGION",
    "DISABLE_SIGNING",
    "ENDPOINT_URL",
    "SLIMAWS_LOG",
]


def collect_config_items() -> List[Tuple[str, Any]]:
    """Returns a list of key-value tuples of the current configuration values."""
    none = object()  # sentinel object

    values = globals()

    result = []
    for k in CONFIG_KEYS:
        v = values.get(k, none)
        if v is none:
            continue
        result.append((k, v))
    result.sort()
    return result
