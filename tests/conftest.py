# Shared pytest fixtures for Vit tests

import pytest
import os
import sys
import shutil
import tempfile

# Add vit-project to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'vit-project'))

from commands import init, add, commit
from utils import repository, index as index_utils


@pytest.fixture
def temp_dir():
    # Creates a temporary directory that is cleaned up after the test
    # Also saves/restores cwd to prevent issues when tests change directories
    original_dir = os.getcwd()
    tmp = os.path.realpath(tempfile.mkdtemp())
    yield tmp
    os.chdir(original_dir)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_repo(temp_dir):
    # Creates an initialized Vit repository in a temporary directory
    init.init_repository(temp_dir)
    return temp_dir


@pytest.fixture
def repo_with_file(temp_repo):
    # Creates a repo with a single file (not staged)
    file_path = os.path.join(temp_repo, 'test.txt')
    with open(file_path, 'w') as f:
        f.write('Hello, World!')
    return temp_repo


@pytest.fixture
def repo_with_commit(temp_repo):
    # Creates a repo with one committed file
    _write_file(temp_repo, "README.md", "# Test Project\n")
    add.stage_files(temp_repo, ['README.md'])
    commit_hash = commit.create_commit(temp_repo, 'Initial', timestamp=1700000000)
    return temp_repo, commit_hash


def _write_file(repo_root, rel_path, content):
    # Writes `content` to `rel_path` inside the repo, creating parent directories
    full_path = os.path.join(repo_root, *rel_path.split('/'))
    os.makedirs(os.path.dirname(full_path), exist_ok=True)
    mode = 'wb' if isinstance(content, bytes) else 'w'
    with open(full_path, mode) as f:
        f.write(content)
    return full_path


def _list_objects(repo_root):
    # Returns the hex names of every object in the store
    objects_dir = os.path.join(repository.get_meta_dir(repo_root), 'objects')
    found = []
    for bucket in sorted(os.listdir(objects_dir)):
        bucket_dir = os.path.join(objects_dir, bucket)
        for name in sorted(os.listdir(bucket_dir)):
            found.append(bucket + name)
    return found


def _make_entry(path, sha1='ab' * 20, size=0, stage=0, mtime_s=0):
    return index_utils.IndexEntry(
        ctime_s=mtime_s, ctime_ns=0, mtime_s=mtime_s, mtime_ns=0,
        dev=0, ino=0, mode=index_utils.REGULAR_FILE_MODE, uid=0, gid=0,
        size=size, sha1=sha1, stage=stage, path=path,
    )


@pytest.fixture
def write_file():
    return _write_file


@pytest.fixture
def list_objects():
    return _list_objects


@pytest.fixture
def make_entry():
    return _make_entry
