# The command: vit add <file>...
# What it does: Takes a snapshot of files from the working directory and stages them for the next commit by updating the index
# How it does: It reads the current index into an in-memory dictionary. Then, for each specified file, it stores the content as a "blob" object and records a new index entry for the file's path. A file that does not exist only produces a warning so the rest of the batch is still staged. Finally, it writes the updated dictionary back to the index file once
# What data structure it uses: Hash Table / Dictionary (to manage the index in memory), List (to hold the list of files to add)

import os
import sys
from utils import repository, index as index_utils
from utils.errors import VitError, NotARepositoryError, PathspecError

def stage_files(repo_root, paths):
    """
    Stages every path in `paths` and writes the index.

    Returns the paths that were skipped because they do not exist. Any other
    error aborts the whole batch before the index is written.
    """
    index = index_utils.read_index(repo_root)
    skipped = []

    for file_path in paths:
        try:
            entry = index_utils.add_file(repo_root, index, file_path)
        except PathspecError as e:
            print(f"warning: {e}", file=sys.stderr)
            skipped.append(file_path)
            continue
        print(f"Added '{entry.path}' to the index.")

    index_utils.write_index(repo_root, index)
    return skipped

def run(args):

#Hashes file contents and stores them as blob objects.
#Updates the index file to stage the changes for the next commit.

    repo_root = repository.find_repo_root() #Finding the root of the repository
    if not repo_root:
        print(f"fatal: {NotARepositoryError()}", file=sys.stderr)
        sys.exit(1)

    try:
        stage_files(repo_root, [os.path.abspath(f) for f in args.files])
    except (VitError, OSError) as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)
