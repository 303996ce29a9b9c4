# The command: vit commit -m "<message>"
# What it does: Creates a permanent, uniquely identified snapshot (a commit object) of the currently staged changes.
# How it does: It builds a hierarchical Merkle Tree from the flat index to get a single root hash for the project's state. It then finds the parent commit, gathers metadata (author, message), and hashes them all into a new "commit" object. Finally, it updates the branch file to point to this new commit's hash.
# What data structure it uses: Merkle Tree (to represent the project's file structure), Directed Acyclic Graph (DAG) (as each commit links to its parent, forming the history graph), Hash Table / Dictionary (the underlying object store)

import sys
import time
from utils import repository, objects, config, index as index_utils
from utils.errors import VitError, NoChangesToCommitError, NotARepositoryError

def format_commit(tree_hash, parent, author, committer, message): # Builds the commit object text
    lines = [f'tree {tree_hash}']
    if parent:
        lines.append(f'parent {parent}')
    lines.append(f'author {author}')
    lines.append(f'committer {committer}')
    lines.append('')
    lines.append(message)
    return ('\n'.join(lines) + '\n').encode()

def parse_commit(content):
    """
    Splits commit object text into a dict with 'tree', 'parents', 'author',
    'committer' and 'message' keys.
    """
    text = content.decode()
    header, _, message = text.partition('\n\n')
    commit = {'tree': None, 'parents': [], 'author': None, 'committer': None, 'message': message}
    for line in header.splitlines():
        key, _, value = line.partition(' ')
        if key == 'parent':
            commit['parents'].append(value)
        elif key in ('tree', 'author', 'committer'):
            commit[key] = value
    return commit

def create_commit(repo_root, message, timestamp=None): # Creates a commit object from the index and advances the branch
    index = index_utils.read_index(repo_root)
    if not index:
        raise NoChangesToCommitError()

    parent = repository.get_head_commit(repo_root)

    entries = [index[path] for path in sorted(index)]
    tree_hash = objects.write_tree(repo_root, entries)

    user_name, user_email, timezone = config.get_user_config(repo_root)
    if timestamp is None:
        timestamp = int(time.time())
    author = f"{user_name} <{user_email}> {timestamp} {timezone}"

    commit_content = format_commit(tree_hash, parent, author, author, message)
    commit_hash = objects.put_commit(repo_root, commit_content)

    branch = repository.get_current_branch(repo_root) or repository.DEFAULT_BRANCH
    repository.update_branch(repo_root, branch, commit_hash)
    repository.set_head(repo_root, branch)

    return commit_hash

def run(args):
    repo_root = repository.find_repo_root()
    if not repo_root:
        print(f"fatal: {NotARepositoryError()}", file=sys.stderr)
        sys.exit(1)

    try:
        commit_hash = create_commit(repo_root, args.message)
    except (VitError, OSError) as e:
        print(f"Error during commit: {e}", file=sys.stderr)
        sys.exit(1)

    branch = repository.get_current_branch(repo_root)
    print(f"[{branch} {commit_hash[:7]}] {args.message.splitlines()[0] if args.message else ''}")
