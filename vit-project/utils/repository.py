# What it does: Provides high-level functions for interacting with the repository structure, like finding the repo root and managing the branch pointer
# How it does: It reads/writes the `HEAD` file and the files in `refs/heads` to manage the repository's current state. Every function takes the repository root explicitly; only `find_repo_root` looks at the current directory, walking up the tree to locate the `.vit` directory
# What data structure it uses: Uses recursion (specifically, linear recursion) to find the repo root. Conceptually, it manages pointers (the `HEAD` file and branch files), which are fundamental components of data structures like Graphs and Linked Lists

import os
import tempfile

META_DIR = '.vit'
DEFAULT_BRANCH = 'main'
FILE_PERMISSIONS = 0o644

def get_meta_dir(repo_root):
    return os.path.join(repo_root, META_DIR)

def find_repo_root(path='.'): # Recursively searches for the .vit directory to find the repository root
    path = os.path.abspath(path)
    if os.path.isdir(get_meta_dir(path)):
        return path
    parent_path = os.path.dirname(path)
    if parent_path == path:
        return None
    return find_repo_root(parent_path)

def write_file_atomic(path, data): # Replaces `path` with `data` so readers see either the old or the new content
    if isinstance(data, str):
        data = data.encode()
    fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(path), prefix='.tmp-')
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        os.chmod(tmp_path, FILE_PERMISSIONS) # mkstemp creates files as 0600
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise

def _branch_path(repo_root, branch_name):
    return os.path.join(get_meta_dir(repo_root), 'refs', 'heads', branch_name)

def get_current_branch(repo_root): # Retrieves the name of the branch HEAD points to, or None if HEAD is missing or detached
    head_path = os.path.join(get_meta_dir(repo_root), 'HEAD')
    if not os.path.exists(head_path):
        return None
    with open(head_path, 'r') as f:
        head_content = f.read().strip()
    if head_content.startswith('ref: refs/heads/'):
        return head_content[len('ref: refs/heads/'):].strip()
    return None

def get_branch_commit(repo_root, branch_name): # Retrieves the commit hash that a given branch points to, or None if the branch has no commits yet
    branch_path = _branch_path(repo_root, branch_name)
    if not os.path.exists(branch_path):
        return None
    with open(branch_path, 'r') as f:
        return f.read().strip() or None

def get_head_commit(repo_root): # Retrieves the commit hash that HEAD points to, or None if there are no commits
    head_path = os.path.join(get_meta_dir(repo_root), 'HEAD')
    if not os.path.exists(head_path):
        return None
    with open(head_path, 'r') as f:
        head_content = f.read().strip()
    if head_content.startswith('ref: '):
        ref_path = head_content.split(' ', 1)[1]
        branch_path = os.path.join(get_meta_dir(repo_root), *ref_path.split('/'))
        if not os.path.exists(branch_path):
            return None
        with open(branch_path, 'r') as f:
            return f.read().strip() or None
    return head_content or None

def update_branch(repo_root, branch_name, commit_hash): # Points a branch at `commit_hash`
    branch_path = _branch_path(repo_root, branch_name)
    os.makedirs(os.path.dirname(branch_path), exist_ok=True)
    write_file_atomic(branch_path, f"{commit_hash}\n")

def set_head(repo_root, branch_name): # Makes HEAD a symbolic reference to `branch_name`
    head_path = os.path.join(get_meta_dir(repo_root), 'HEAD')
    write_file_atomic(head_path, f"ref: refs/heads/{branch_name}\n")
