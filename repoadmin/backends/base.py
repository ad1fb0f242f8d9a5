from abc import ABC, abstractmethod
from pathlib import Path


class GitBackend(ABC):
    """
    Abstract base class for the bare-repository creation primitive.
    Implementations can use a git library, the git binary, or anything else
    that produces a bare repository on disk.
    """

    @abstractmethod
    def init_bare(self, path: Path) -> None:
        """
        Create a bare git repository at path.

        Args:
            path: Directory to create the repository in (created if missing)

        Raises:
            Any error from the underlying implementation; callers treat it
            as fatal.
        """
        pass
