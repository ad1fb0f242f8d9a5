import logging
from pathlib import Path

from git import Repo

from .base import GitBackend

logger = logging.getLogger(__name__)


class GitPythonBackend(GitBackend):
    """
    GitPython-based backend.
    Equivalent to running `git init --bare <path>`.
    """

    def init_bare(self, path: Path) -> None:
        """
        Create a bare repository with GitPython.

        Args:
            path: Repository directory; missing parents are created
        """
        repo = Repo.init(str(path), mkdir=True, bare=True)
        logger.debug(f"Created bare repository at {repo.git_dir}")
        repo.close()
