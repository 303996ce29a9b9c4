# What it does: Provides centralized read/write operations for the .vit/index file (the staging area)
# How it does: Encodes the index in the binary DIRC version 2 layout: a 12-byte header, one fixed-size record plus a NUL-terminated path per entry (padded to 8-byte file offsets), and a SHA-1 trailer over everything before it
# What data structure it uses: Dictionary (mapping file paths to IndexEntry tuples)

import os
import struct
from collections import namedtuple

from .errors import InvalidIndexFormatError, InvalidPathError, OutsideRepositoryError, PathspecError
from .objects import hash_bytes, put_blob
from .repository import get_meta_dir, write_file_atomic

INDEX_SIGNATURE = b'DIRC'
INDEX_VERSION = 2
REGULAR_FILE_MODE = 0o100644

HEADER_FORMAT = '>4sLL'
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)  # 12
ENTRY_FORMAT = '>10L20sH'
ENTRY_SIZE = struct.calcsize(ENTRY_FORMAT)  # 62
CHECKSUM_SIZE = 20

FLAG_NAMEMASK = 0x0FFF
FLAG_STAGEMASK = 0x3000
FLAG_STAGESHIFT = 12

IndexEntry = namedtuple('IndexEntry', [
    'ctime_s', 'ctime_ns', 'mtime_s', 'mtime_ns', 'dev', 'ino',
    'mode', 'uid', 'gid', 'size', 'sha1', 'stage', 'path',
])

def get_index_path(repo_root):
    return os.path.join(get_meta_dir(repo_root), 'index')

def _u32(value):
    return int(value) & 0xFFFFFFFF

def entry_from_stat(path, sha1, st, stage=0): # Builds an IndexEntry for `path` from an os.stat result
    return IndexEntry(
        ctime_s=_u32(st.st_ctime_ns // 1_000_000_000),
        ctime_ns=st.st_ctime_ns % 1_000_000_000,
        mtime_s=_u32(st.st_mtime_ns // 1_000_000_000),
        mtime_ns=st.st_mtime_ns % 1_000_000_000,
        dev=_u32(st.st_dev),
        ino=_u32(st.st_ino),
        mode=REGULAR_FILE_MODE,
        uid=_u32(st.st_uid),
        gid=_u32(st.st_gid),
        size=_u32(st.st_size),
        sha1=sha1,
        stage=stage,
        path=path,
    )

def _padding(offset):
    return (8 - offset % 8) % 8

def serialize_index(index):
    """
    Encodes `index` ({path: IndexEntry}) into the binary index format.

    Entries are written sorted by path. Each path is followed by a NUL and
    then zero bytes until the absolute offset in the buffer is a multiple of
    8. Paths of 4095 bytes or more store 0x0FFF as their length.
    """
    data = bytearray(struct.pack(HEADER_FORMAT, INDEX_SIGNATURE, INDEX_VERSION, len(index)))

    for path in sorted(index):
        entry = index[path]
        path_bytes = entry.path.encode('utf-8')
        flags = ((entry.stage << FLAG_STAGESHIFT) & FLAG_STAGEMASK) | min(len(path_bytes), FLAG_NAMEMASK)
        data += struct.pack(
            ENTRY_FORMAT,
            entry.ctime_s, entry.ctime_ns, entry.mtime_s, entry.mtime_ns,
            entry.dev, entry.ino, entry.mode, entry.uid, entry.gid, entry.size,
            bytes.fromhex(entry.sha1), flags,
        )
        data += path_bytes + b'\0'
        data += b'\0' * _padding(len(data))

    data += hash_bytes(bytes(data))
    return bytes(data)

def parse_index(data):
    """
    Decodes a binary index into {path: IndexEntry}.

    Raises InvalidIndexFormatError for a short buffer, an unknown signature or
    version, an entry running past the end of the buffer, or a bad trailer.
    """
    if len(data) < HEADER_SIZE:
        raise InvalidIndexFormatError("Invalid index file format: file too short")

    signature, version, count = struct.unpack_from(HEADER_FORMAT, data, 0)
    if signature != INDEX_SIGNATURE:
        raise InvalidIndexFormatError(f"Invalid index file format: bad signature {signature!r}")
    if version != INDEX_VERSION:
        raise InvalidIndexFormatError(f"Invalid index file format: unsupported version {version}")

    index = {}
    offset = HEADER_SIZE
    for _ in range(count):
        if offset + ENTRY_SIZE > len(data):
            raise InvalidIndexFormatError("Invalid index file format: truncated entry")
        fields = struct.unpack_from(ENTRY_FORMAT, data, offset)
        offset += ENTRY_SIZE

        flags = fields[11]
        name_len = flags & FLAG_NAMEMASK
        if name_len < FLAG_NAMEMASK:
            path_end = offset + name_len
            if path_end >= len(data) or data[path_end] != 0:
                raise InvalidIndexFormatError("Invalid index file format: path overruns entry")
        else:
            # Length field is saturated, so the NUL terminator is authoritative
            path_end = data.find(b'\0', offset)
            if path_end < 0:
                raise InvalidIndexFormatError("Invalid index file format: unterminated path")

        try:
            path = bytes(data[offset:path_end]).decode('utf-8')
        except UnicodeDecodeError:
            raise InvalidIndexFormatError("Invalid index file format: path is not UTF-8")

        offset = path_end + 1
        offset += _padding(offset)
        if offset > len(data):
            raise InvalidIndexFormatError("Invalid index file format: truncated padding")

        index[path] = IndexEntry(
            *fields[:10],
            sha1=fields[10].hex(),
            stage=(flags & FLAG_STAGEMASK) >> FLAG_STAGESHIFT,
            path=path,
        )

    trailer = data[offset:offset + CHECKSUM_SIZE]
    if trailer and bytes(trailer) != hash_bytes(bytes(data[:offset])):
        raise InvalidIndexFormatError("Invalid index file format: checksum mismatch")

    return index

def read_index(repo_root):
    """
    Reads the index file and returns a dictionary {path: IndexEntry}.
    A repository without an index file has an empty staging area.
    """
    index_path = get_index_path(repo_root)
    if not os.path.exists(index_path):
        return {}
    with open(index_path, 'rb') as f:
        return parse_index(f.read())

def write_index(repo_root, index):
    index_path = get_index_path(repo_root)
    os.makedirs(os.path.dirname(index_path), exist_ok=True)
    write_file_atomic(index_path, serialize_index(index))

def to_index_path(repo_root, file_path): # Converts a filesystem path into the slash-separated path stored in the index
    if not os.path.isabs(file_path):
        file_path = os.path.join(repo_root, file_path)
    rel_path = os.path.relpath(file_path, repo_root)
    if rel_path == os.pardir or rel_path.startswith(os.pardir + os.sep):
        raise OutsideRepositoryError(file_path)
    path = rel_path.replace(os.sep, '/')
    try:
        path.encode('utf-8')
    except UnicodeEncodeError:
        raise InvalidPathError(file_path) from None
    return path

def _drop_conflicting_entries(index, path): # A path can be staged as a file or as a directory, never both
    parts = path.split('/')
    for i in range(1, len(parts)):
        index.pop('/'.join(parts[:i]), None)
    prefix = path + '/'
    for staged in [p for p in index if p.startswith(prefix)]:
        del index[staged]

def add_file(repo_root, index, file_path):
    """
    Stages `file_path` in the in-memory `index`, replacing any previous entry.
    A staged file at one of its parent directories, or staged files below it
    when it used to be a directory, are dropped.

    The blob is written to the object store before the entry is recorded.
    Raises PathspecError if the file does not exist; other OS errors propagate.
    """
    full_path = file_path if os.path.isabs(file_path) else os.path.join(repo_root, file_path)
    if not os.path.isfile(full_path):
        raise PathspecError(file_path)
    path = to_index_path(repo_root, full_path)

    with open(full_path, 'rb') as f:
        content = f.read()
    sha1 = put_blob(repo_root, content)

    st = os.stat(full_path)
    entry = entry_from_stat(path, sha1, st)
    entry = entry._replace(size=_u32(len(content)))
    _drop_conflicting_entries(index, entry.path)
    index[entry.path] = entry
    return entry

def remove_file(index, file_path):
    index.pop(file_path, None)

