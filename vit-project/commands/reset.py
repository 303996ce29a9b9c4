# The command: vit reset <file>...
# What it does: Unstages files by removing them from the staging area (the index). It is the opposite of `vit add`
# How it does: It reads the index into memory, drops the entries for the given paths (paths that are not staged are ignored) and writes the index back
# What data structure it uses: Hash Table / Dictionary (the in-memory index)

import os
import sys
from utils import repository, index as index_utils
from utils.errors import VitError, NotARepositoryError

def unstage_files(repo_root, paths): # Removes `paths` from the index; returns the index paths that were actually staged
    index = index_utils.read_index(repo_root)
    removed = []
    for file_path in paths:
        path = index_utils.to_index_path(repo_root, file_path)
        if path in index:
            removed.append(path)
        index_utils.remove_file(index, path)
    index_utils.write_index(repo_root, index)
    return removed

def run(args): #Executes the reset command to unstage files
    repo_root = repository.find_repo_root()
    if not repo_root:
        print(f"fatal: {NotARepositoryError()}", file=sys.stderr)
        sys.exit(1)

    try:
        removed = unstage_files(repo_root, [os.path.abspath(f) for f in args.files])
    except (VitError, OSError) as e:
        print(f"Error resetting files: {e}", file=sys.stderr)
        sys.exit(1)

    print("Unstaged changes after reset:")
    for path in removed:
        print(f" M {path}")
