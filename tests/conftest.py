"""
Pytest configuration and shared fixtures.
"""

import tempfile
import shutil
from pathlib import Path

import pytest

from repoadmin.backends import GitPythonBackend
from repoadmin.core import RepositoryRegistry


class BrokenBackend(GitPythonBackend):
    """Backend whose repository creation always fails"""

    def init_bare(self, path):
        raise OSError("disk full")


class UnwritableDescriptionBackend(GitPythonBackend):
    """Creates a real bare repo, but leaves a directory where `description` should go"""

    def init_bare(self, path):
        super().init_bare(path)
        description = Path(path) / 'description'
        if description.exists():
            description.unlink()
        description.mkdir()


class NoTemplatesBackend(GitPythonBackend):
    """Creates a bare repo without a hooks/ directory, like git with an empty template dir"""

    def init_bare(self, path):
        super().init_bare(path)
        shutil.rmtree(Path(path) / 'hooks', ignore_errors=True)


@pytest.fixture
def temp_dir():
    """Fixture that provides a temporary directory and cleans it up after test"""
    tmp = tempfile.mkdtemp()
    yield tmp
    shutil.rmtree(tmp)


@pytest.fixture
def registry(temp_dir):
    """Fixture that provides a registry rooted at <temp_dir>/repos"""
    return RepositoryRegistry(Path(temp_dir) / 'repos')


def snapshot(path):
    """Map of relative file path -> bytes for every file under path"""
    path = Path(path)
    return {
        str(p.relative_to(path)): p.read_bytes()
        for p in sorted(path.rglob('*'))
        if p.is_file()
    }
