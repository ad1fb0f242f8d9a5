from .errors import (
    RepositoryError,
    RepositoryExistsError,
    RepositoryNotFoundError,
    InvalidRepositoryNameError,
    RepositoryInitError,
)
from . import layout
from .registry import RepositoryRegistry, OperationResult

__all__ = ['layout', 'RepositoryRegistry', 'OperationResult', 'RepositoryError',
           'RepositoryExistsError', 'RepositoryNotFoundError', 'InvalidRepositoryNameError',
           'RepositoryInitError']
