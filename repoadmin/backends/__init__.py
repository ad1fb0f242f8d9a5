from .base import GitBackend
from .gitpython_backend import GitPythonBackend

__all__ = ['GitBackend', 'GitPythonBackend']
