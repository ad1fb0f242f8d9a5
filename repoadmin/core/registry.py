import configparser
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from repoadmin.backends import GitBackend, GitPythonBackend
from repoadmin.models import RepoMetadata, RepositoryInfo
from repoadmin.core import layout
from repoadmin.core.errors import (
    RepositoryExistsError,
    RepositoryNotFoundError,
    RepositoryInitError,
    InvalidRepositoryNameError,
)

logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    """
    Outcome of an operation that writes metadata files.

    Metadata writes are not transactional: a failure on one file is recorded
    here and the remaining files are still written.
    """
    name: str
    path: Path
    failed_files: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed_files


class RepositoryRegistry:
    """
    Manages the bare repositories living under a single root directory.

    The filesystem is the only source of truth: a repository exists iff
    <root>/<name>.git exists, and listing enumerates the root. Nothing is
    cached between calls.

    Existence checks and the following mutation are not atomic, so two
    processes racing on the same name can both pass the check; the loser then
    fails in the backend or overwrites the winner's metadata.
    """

    def __init__(self, root: Path, backend: Optional[GitBackend] = None):
        self.root = Path(root)
        self.backend = backend or GitPythonBackend()

    def path_for(self, name: str) -> Path:
        return layout.repo_path(self.root, layout.validate_repo_name(name))

    def exists(self, name: str) -> bool:
        return self.path_for(name).exists()

    def init(self, name: str, section: str = "", description: str = "",
             owner: str = "") -> OperationResult:
        """
        Create a bare repository and populate its metadata files.

        Args:
            name: Repository name (without .git)
            section: cgit section
            description: Free-text description
            owner: gitweb owner

        Returns:
            OperationResult listing metadata files that could not be written

        Raises:
            InvalidRepositoryNameError: If the name is unusable or ends in .git
            RepositoryExistsError: If the repository directory already exists
            RepositoryInitError: If the bare repository could not be created
        """
        path = layout.repo_path(self.root, layout.validate_new_repo_name(name))

        if path.exists():
            raise RepositoryExistsError(f"Repository '{name}' already exists")

        metadata = RepoMetadata(section=section, description=description, owner=owner)

        try:
            self.backend.init_bare(path)
        except Exception as e:
            raise RepositoryInitError(f"Failed to initialize repository at {path}: {e}") from e

        result = OperationResult(name=name, path=path)
        self._write_metadata(result, metadata, RepoMetadata.model_fields.keys())
        self._write_hook(result)

        logger.info(f"Initialized repository {name} at {path}")
        return result

    def rename(self, oldname: str, newname: str) -> OperationResult:
        """
        Move a repository to a new name and repoint its post-update hook.

        config, description and cgitrc travel with the directory unchanged.

        Raises:
            RepositoryNotFoundError: If oldname does not exist (checked first)
            RepositoryExistsError: If newname already exists
        """
        old_path = layout.repo_path(self.root, layout.validate_repo_name(oldname))
        new_path = layout.repo_path(self.root, layout.validate_new_repo_name(newname))

        if not old_path.exists():
            raise RepositoryNotFoundError(f"Repository '{oldname}' doesn't exist")
        if new_path.exists():
            raise RepositoryExistsError(f"Repository '{newname}' already exists")

        old_path.rename(new_path)

        result = OperationResult(name=newname, path=new_path)
        self._write_hook(result)

        logger.info(f"Renamed repository {oldname} to {newname}")
        return result

    def remove(self, name: str) -> Path:
        """
        Recursively delete a repository. This cannot be undone.

        Returns:
            Path of the deleted directory

        Raises:
            RepositoryNotFoundError: If the repository does not exist
        """
        path = layout.repo_path(self.root, layout.validate_repo_name(name))

        if not path.exists():
            raise RepositoryNotFoundError(f"Repository '{name}' doesn't exist")

        shutil.rmtree(path)

        logger.info(f"Removed repository {name}")
        return path

    def change(self, name: str, section: Optional[str] = None,
               description: Optional[str] = None,
               owner: Optional[str] = None) -> OperationResult:
        """
        Overwrite the metadata fields that were supplied.

        None means "leave untouched"; an empty string clears the field.

        Raises:
            RepositoryNotFoundError: If the repository does not exist
        """
        path = layout.repo_path(self.root, layout.validate_repo_name(name))

        if not path.exists():
            raise RepositoryNotFoundError(f"Repository '{name}' doesn't exist")

        supplied = {
            key: value
            for key, value in (('section', section), ('description', description), ('owner', owner))
            if value is not None
        }
        metadata = RepoMetadata(**supplied)

        result = OperationResult(name=name, path=path)
        self._write_metadata(result, metadata, metadata.model_fields_set)

        logger.info(f"Changed {', '.join(sorted(metadata.model_fields_set)) or 'nothing'} for {name}")
        return result

    def list(self) -> List[str]:
        """Names of all repositories under the root, sorted."""
        if not self.root.is_dir():
            return []

        names = []
        for entry in self.root.iterdir():
            if not entry.name.endswith(layout.REPO_SUFFIX) or not entry.is_dir():
                continue
            name = entry.name[:-len(layout.REPO_SUFFIX)]
            try:
                layout.validate_repo_name(name)
            except InvalidRepositoryNameError:
                logger.warning(f"Skipping {entry}: not addressable as a repository name")
                continue
            names.append(name)
        return sorted(names)

    def info(self, name: str) -> RepositoryInfo:
        """
        Read a repository's metadata back from disk.

        Missing or unparsable metadata files read as empty values.

        Raises:
            RepositoryNotFoundError: If the repository does not exist
        """
        path = layout.repo_path(self.root, layout.validate_repo_name(name))

        if not path.exists():
            raise RepositoryNotFoundError(f"Repository '{name}' doesn't exist")

        return RepositoryInfo(
            name=name,
            path=str(path),
            section=layout.parse_cgitrc(self._read_text(path / layout.CGITRC_FILE)),
            description=self._read_text(path / layout.DESCRIPTION_FILE),
            owner=self._read_owner(path / layout.CONFIG_FILE),
        )

    def list_info(self) -> List[RepositoryInfo]:
        return [self.info(name) for name in self.list()]

    def _write_metadata(self, result: OperationResult, metadata: RepoMetadata, fields) -> None:
        files = {
            'owner': (layout.CONFIG_FILE, layout.format_owner_config),
            'description': (layout.DESCRIPTION_FILE, layout.format_description),
            'section': (layout.CGITRC_FILE, layout.format_cgitrc),
        }
        for key in ('owner', 'description', 'section'):
            if key not in fields:
                continue
            filename, formatter = files[key]
            self._write_file(result, filename, formatter(getattr(metadata, key)))

    def _write_hook(self, result: OperationResult) -> None:
        hook = result.path / layout.POST_UPDATE_HOOK
        try:
            hook.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Failed to create {hook.parent}: {e}")
            result.failed_files.append(layout.POST_UPDATE_HOOK)
            return
        content = layout.format_post_update_hook(result.path.absolute())
        if self._write_file(result, layout.POST_UPDATE_HOOK, content):
            try:
                hook.chmod(layout.HOOK_MODE)
            except OSError as e:
                logger.warning(f"Failed to make {hook} executable: {e}")
                result.failed_files.append(layout.POST_UPDATE_HOOK)

    def _write_file(self, result: OperationResult, filename: str, content: str) -> bool:
        """Truncate-and-write one metadata file, recording failure instead of raising."""
        target = result.path / filename
        try:
            target.write_text(content, encoding='utf-8')
        except OSError as e:
            logger.warning(f"Failed to write {target}: {e}")
            result.failed_files.append(filename)
            return False
        return True

    def _read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding='utf-8', errors='replace')
        except OSError:
            return ""

    def _read_owner(self, path: Path) -> str:
        try:
            return layout.read_owner(path)
        except (OSError, ValueError, configparser.Error) as e:
            logger.warning(f"Could not read owner from {path}: {e}")
            return ""
