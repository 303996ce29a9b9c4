# What it does: Manages the low-level object database, handling the storage and retrieval of all blobs, trees, and commits
# How it does: It implements a content-addressed storage system. `hash_object` frames content with a `<type> <size>\0` header, hashes the framed bytes with SHA-1, compresses them with zlib and stores them under `objects/<first 2 hex>/<remaining 38 hex>`. `write_tree` turns the flat index into nested tree objects by recursing on path depth
# What data structure it uses: Hash Table / Dictionary (the entire object store is a content-addressed dictionary where the SHA-1 hash is the key), Merkle Tree (each tree names its subtrees by hash)

import os
import hashlib
import zlib

from .errors import ObjectNotFoundError, CorruptObjectError
from .repository import get_meta_dir, write_file_atomic

FILE_MODE = '100644'
TREE_MODE = '40000'

def hash_bytes(data): # Returns the raw 20-byte SHA-1 digest of `data`
    return hashlib.sha1(data).digest()

def compress(data):
    return zlib.compress(data)

def decompress(data):
    return zlib.decompress(data)

def object_path(repo_root, sha1):
    return os.path.join(get_meta_dir(repo_root), 'objects', sha1[:2], sha1[2:])

def object_exists(repo_root, sha1):
    return os.path.isfile(object_path(repo_root, sha1))

def hash_object(repo_root, content, obj_type, write=True): #Hashes content and optionally writes it as an object of the given type ('blob', 'tree', 'commit')
    header = f'{obj_type} {len(content)}\0'.encode()
    data = header + content

    sha1 = hash_bytes(data).hex()

    if write:
        path = object_path(repo_root, sha1)
        if os.path.exists(path):
            # Same digest means same bytes; nothing to rewrite
            return sha1

        compressed = compress(data)
        object_dir = os.path.dirname(path)
        os.makedirs(object_dir, exist_ok=True)
        write_file_atomic(path, compressed)

    return sha1

def put_blob(repo_root, content):
    return hash_object(repo_root, content, 'blob')

def put_tree(repo_root, serialized_entries):
    return hash_object(repo_root, serialized_entries, 'tree')

def put_commit(repo_root, serialized_commit):
    return hash_object(repo_root, serialized_commit, 'commit')

def read_object(repo_root, sha1): #Reads an object by its SHA-1 hash and returns its type and content

    path = object_path(repo_root, sha1)

    if not os.path.exists(path):
        raise ObjectNotFoundError(sha1)

    with open(path, 'rb') as f:
        compressed_data = f.read()

    data = decompress(compressed_data)

    null_byte_index = data.find(b'\0')
    if null_byte_index < 0:
        raise CorruptObjectError(f"Corrupt object {sha1}: missing header terminator")
    header = data[:null_byte_index].decode()
    content = data[null_byte_index + 1:]

    try:
        obj_type, size = header.split(' ')
        size = int(size)
    except ValueError:
        raise CorruptObjectError(f"Corrupt object {sha1}: bad header {header!r}")
    if size != len(content):
        raise CorruptObjectError(f"Corrupt object {sha1}: expected {size} bytes, found {len(content)}")

    return obj_type, content

def _tree_sort_key(item):
    # Git orders directories as if their name ended in '/'
    mode, name, _ = item
    name = name.encode()
    return name + b'/' if mode == TREE_MODE else name

def serialize_tree(items):
    """
    Encodes tree items as `<mode> <name>\\0<20-byte digest>` records.

    `items` is an iterable of (mode, name, hex sha1) tuples; they are written
    in Git's canonical order so trees built here hash the same as Git's.
    """
    parts = []
    for mode, name, sha1 in sorted(items, key=_tree_sort_key):
        parts.append(f'{mode} {name}\0'.encode() + bytes.fromhex(sha1))
    return b''.join(parts)

def parse_tree(content): # Decodes a tree payload into a list of (mode, name, hex sha1) tuples
    items = []
    offset = 0
    while offset < len(content):
        space = content.find(b' ', offset)
        nul = content.find(b'\0', space + 1)
        if space < 0 or nul < 0 or nul + 21 > len(content):
            raise CorruptObjectError("Corrupt tree entry")
        mode = content[offset:space].decode()
        name = content[space + 1:nul].decode()
        sha1 = content[nul + 1:nul + 21].hex()
        items.append((mode, name, sha1))
        offset = nul + 21
    return items

def write_tree(repo_root, entries, depth=0): #Recursively writes tree objects for the index entries and returns the root tree hash
    """
    Builds the tree for `entries` at path depth `depth`.

    An entry whose path has exactly `depth + 1` segments is a file of this
    tree. Longer paths are grouped by their `depth`-th segment and each group
    becomes a subtree, written first so its hash can be recorded here.
    """
    items = []
    subdirs = {}

    for entry in entries:
        parts = entry.path.split('/')
        if len(parts) == depth + 1:
            items.append((FILE_MODE, parts[depth], entry.sha1))
        else:
            subdirs.setdefault(parts[depth], []).append(entry)

    for name, sub_entries in subdirs.items():
        subtree_hash = write_tree(repo_root, sub_entries, depth + 1)
        items.append((TREE_MODE, name, subtree_hash))

    return put_tree(repo_root, serialize_tree(items))

def get_commit_tree_hash(repo_root, commit_hash): # Retrieves the tree hash from a commit object
    if not commit_hash:
        return None
    obj_type, content = read_object(repo_root, commit_hash)
    if obj_type != 'commit':
        raise TypeError(f"Object {commit_hash} is not a commit")
    for line in content.decode().splitlines():
        if line.startswith('tree '):
            return line.split(' ')[1]
    return None

def get_commit_files(repo_root, commit_hash): #Retrieves all files and their hashes from a commit by reading its tree recursively

    if not commit_hash:
        return {}

    tree_hash = get_commit_tree_hash(repo_root, commit_hash)
    if not tree_hash:
        return {}

    files = {}

    def read_tree_recursive(tree_sha, path_prefix=""):
        obj_type, content = read_object(repo_root, tree_sha)
        if obj_type != 'tree':
            raise TypeError(f"Object {tree_sha} is not a tree")

        for mode, name, sha1 in parse_tree(content):
            current_path = f"{path_prefix}{name}"
            if mode == TREE_MODE:
                read_tree_recursive(sha1, current_path + '/')
            else:
                files[current_path] = sha1

    read_tree_recursive(tree_hash)
    return files
