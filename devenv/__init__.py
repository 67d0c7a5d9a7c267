from .environment import (
    AppConfig,
    DevConfig,
    DevEnvironment,
    ServiceConfig,
    create_dev_environment,
    define_dev_config,
)
from .errors import ConfigNotFoundError, DevEnvError, DevEnvNotLoadedError, InvalidConfigError
from .loader import (
    DevEnvContext,
    clear_dev_env_cache,
    default_context,
    get_dev_env,
    load_dev_env,
)
from .locator import CONFIG_FILES, find_config_file
from .version import __version__

__all__ = [
    "AppConfig",
    "CONFIG_FILES",
    "ConfigNotFoundError",
    "DevConfig",
    "DevEnvContext",
    "DevEnvError",
    "DevEnvNotLoadedError",
    "DevEnvironment",
    "InvalidConfigError",
    "ServiceConfig",
    "__version__",
    "clear_dev_env_cache",
    "create_dev_environment",
    "default_context",
    "define_dev_config",
    "find_config_file",
    "get_dev_env",
    "load_dev_env",
]
