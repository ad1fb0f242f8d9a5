"""
Repository layout - the on-disk naming and metadata-file convention.

cgit and gitweb read these files directly, so their content must stay
byte-for-byte stable:

    <root>/<name>.git/
      config            "\\n[gitweb]\\n\\towner = <owner>"
      description       "<description>"
      cgitrc            "section=<section>"
      hooks/post-update "#!/bin/sh\\nchmod g+w -R <abs-path> 2> /dev/null"
"""

from pathlib import Path

from git.config import GitConfigParser

from repoadmin.core.errors import InvalidRepositoryNameError

REPO_SUFFIX = '.git'

CONFIG_FILE = 'config'
DESCRIPTION_FILE = 'description'
CGITRC_FILE = 'cgitrc'
POST_UPDATE_HOOK = 'hooks/post-update'

HOOK_MODE = 0o755

_FORBIDDEN_NAME_CHARS = ['/', '\0', '\n', '\r']


def validate_repo_name(name: str) -> str:
    """
    Check that a name can address <root>/<name>.git and nothing else.

    Names are taken verbatim, so every name `RepositoryRegistry.list` reports
    can be passed back to the other operations unchanged.

    Raises:
        InvalidRepositoryNameError: If the name is empty, contains a path
            separator or would break the one-name-per-line listing
    """
    if not name:
        raise InvalidRepositoryNameError("Repository name cannot be empty")
    if any(c in name for c in _FORBIDDEN_NAME_CHARS):
        raise InvalidRepositoryNameError("Repository name cannot contain special characters (/, NUL, newlines)")
    return name


def validate_new_repo_name(name: str) -> str:
    """Like validate_repo_name, but also refuses the '.git' suffix for names about to be created."""
    validate_repo_name(name)
    if name.endswith(REPO_SUFFIX):
        raise InvalidRepositoryNameError(
            f"Repository names are given without the {REPO_SUFFIX} suffix: {name!r}"
        )
    return name


def repo_dirname(name: str) -> str:
    return f"{name}{REPO_SUFFIX}"


def repo_path(root: Path, name: str) -> Path:
    """Directory of the bare repository called `name` under `root`."""
    return Path(root) / repo_dirname(name)


def format_owner_config(owner: str) -> str:
    return f"\n[gitweb]\n\towner = {owner}"


def format_description(description: str) -> str:
    return description


def format_cgitrc(section: str) -> str:
    return f"section={section}"


def format_post_update_hook(path: Path) -> str:
    """Hook granting group-write on the whole repository after every push."""
    return f"#!/bin/sh\nchmod g+w -R {path} 2> /dev/null"


def parse_cgitrc(text: str) -> str:
    """Return the section configured in a cgitrc file, or '' if there is none."""
    section = ''
    for line in text.splitlines():
        key, sep, value = line.partition('=')
        if sep and key.strip() == 'section':
            section = value
    return section


def read_owner(config_path: Path) -> str:
    """Read gitweb.owner from a git config file, '' when unset or unreadable."""
    parser = GitConfigParser(str(config_path), read_only=True)
    return str(parser.get('gitweb', 'owner', fallback=''))
