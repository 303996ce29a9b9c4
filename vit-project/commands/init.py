# The command: vit init
# What it does: Initializes a new, empty repository by creating the hidden `.vit` directory and its internal structure
# How it does: It creates the `objects`, `refs/heads` and `refs/tags` subdirectories, writes a `HEAD` file holding a symbolic reference to the 'main' branch, and writes the default `config`
# What data structure it uses: Tree (the file system directory structure is a tree). It also lays the foundation for a Hash Table (the object database) and a Directed Acyclic Graph (the commit history)

import os
import sys
from utils import repository, config
from utils.errors import RepositoryExistsError

def init_repository(repo_root): # Creates the .vit skeleton under `repo_root` and returns its path
    meta_dir = repository.get_meta_dir(repo_root)
    if os.path.exists(meta_dir):
        raise RepositoryExistsError()

    os.makedirs(os.path.join(meta_dir, 'objects'))
    os.makedirs(os.path.join(meta_dir, 'refs', 'heads'))
    os.makedirs(os.path.join(meta_dir, 'refs', 'tags'))

    repository.set_head(repo_root, repository.DEFAULT_BRANCH)
    config.write_default_config(repo_root)
    return meta_dir

def run(args):
    repo_root = os.path.abspath(getattr(args, 'directory', None) or os.getcwd())
    try:
        meta_dir = init_repository(repo_root)
    except RepositoryExistsError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error initializing repository: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Initialized empty Vit repository in {meta_dir}/")
