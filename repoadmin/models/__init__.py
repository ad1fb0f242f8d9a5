from .repository import RepoMetadata, RepositoryInfo

__all__ = ['RepoMetadata', 'RepositoryInfo']
