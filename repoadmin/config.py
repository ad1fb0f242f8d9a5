import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Repositories always live under $HOME/<REPOS_DIRNAME>
REPOS_DIRNAME = 'repos'


class ConfigError(RuntimeError):
    """Raised when the environment cannot provide required configuration."""


class Config:
    """Application configuration"""

    # Logging
    LOG_LEVEL = os.getenv('REPOADMIN_LOG_LEVEL', 'WARNING')

    @staticmethod
    def repos_root() -> Path:
        """
        Resolve the registry root directory from $HOME.

        Returns:
            Absolute path of $HOME/repos

        Raises:
            ConfigError: If HOME is unset or empty
        """
        home = os.getenv('HOME')
        if not home:
            raise ConfigError("Couldn't get $HOME variable")
        return Path(home).absolute() / REPOS_DIRNAME
