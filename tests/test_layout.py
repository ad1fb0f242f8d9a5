"""
Tests for the on-disk naming and metadata-file convention.
"""
from pathlib import Path

import pytest

from repoadmin.core import layout, RepositoryError, InvalidRepositoryNameError


@pytest.mark.parametrize('name', ['dotfiles', 'my.project', 'x.git', ' spaced ', '..', 'a\\b'])
def test_validate_repo_name_takes_names_verbatim(name):
    assert layout.validate_repo_name(name) == name


@pytest.mark.parametrize('name', ['', 'a/b', '../escape', 'a\nb', 'a\0b'])
def test_validate_repo_name_rejects_invalid(name):
    with pytest.raises(InvalidRepositoryNameError):
        layout.validate_repo_name(name)


def test_invalid_name_is_a_repository_error():
    with pytest.raises(RepositoryError):
        layout.validate_repo_name('../escape')


def test_validate_new_repo_name_refuses_git_suffix():
    assert layout.validate_new_repo_name('dotfiles') == 'dotfiles'
    with pytest.raises(InvalidRepositoryNameError, match='without the .git suffix'):
        layout.validate_new_repo_name('dotfiles.git')


def test_repo_path():
    assert layout.repo_path(Path('/srv/repos'), 'dotfiles') == Path('/srv/repos/dotfiles.git')


def test_metadata_formats_are_exact():
    assert layout.format_owner_config('Jane Doe') == "\n[gitweb]\n\towner = Jane Doe"
    assert layout.format_owner_config('') == "\n[gitweb]\n\towner = "
    assert layout.format_description('My dotfiles') == "My dotfiles"
    assert layout.format_cgitrc('personal') == "section=personal"
    assert layout.format_cgitrc('') == "section="
    assert layout.format_post_update_hook(Path('/home/me/repos/x.git')) == \
        "#!/bin/sh\nchmod g+w -R /home/me/repos/x.git 2> /dev/null"


def test_parse_cgitrc():
    assert layout.parse_cgitrc("section=personal") == "personal"
    assert layout.parse_cgitrc("section=") == ""
    assert layout.parse_cgitrc("") == ""
    assert layout.parse_cgitrc("garbage without equals") == ""
    assert layout.parse_cgitrc("desc=x\nsection=a\nsection=b\n") == "b"


def test_read_owner(temp_dir):
    config = Path(temp_dir) / 'config'
    config.write_text(layout.format_owner_config('Jane Doe'))
    assert layout.read_owner(config) == 'Jane Doe'

    config.write_text(layout.format_owner_config(''))
    assert layout.read_owner(config) == ''

    config.write_text("[core]\n\tbare = true\n")
    assert layout.read_owner(config) == ''


def test_read_owner_missing_file(temp_dir):
    assert layout.read_owner(Path(temp_dir) / 'missing') == ''
