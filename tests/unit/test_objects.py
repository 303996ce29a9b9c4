# Unit tests for utils/objects.py

import pytest
import os
import sys
import zlib

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'vit-project'))

from utils import objects
from utils.errors import ObjectNotFoundError, CorruptObjectError


class TestHashing:
    # Tests for objects.hash_bytes() and the object header framing

    @pytest.mark.parametrize('data', [b'', b'hello\n', bytes(range(256)) * 10])
    def test_digest_is_stable(self, data):
        # Same input always yields the same 20-byte digest
        first = objects.hash_bytes(data)
        assert len(first) == 20
        assert objects.hash_bytes(bytes(data)) == first

    def test_different_content_different_digest(self):
        assert objects.hash_bytes(b'a') != objects.hash_bytes(b'b')

    @pytest.mark.parametrize('content, expected', [
        (b'', 'e69de29bb2d1d6434b8b29ae775ad8c2e48c5391'),
        (b'hello\n', 'ce013625030ba8dba906f756967f9e9ca394464a'),
    ])
    def test_blob_ids_match_git(self, content, expected):
        # Header framing matches `git hash-object`
        assert objects.hash_object(None, content, 'blob', write=False) == expected

    def test_empty_tree_id_matches_git(self):
        assert objects.hash_object(None, b'', 'tree', write=False) == '4b825dc642cb6eb9a060e54bf8d69288fbee4904'


class TestCompression:
    # Tests for objects.compress() / objects.decompress()

    @pytest.mark.parametrize('data', [
        b'',
        b'x',
        b'Hello, World!' * 1000,
        bytes(range(256)),
        os.urandom(4096),
    ])
    def test_round_trip(self, data):
        assert objects.decompress(objects.compress(data)) == data

    def test_uses_zlib_stream(self):
        # Stored objects are plain zlib streams
        assert zlib.decompress(objects.compress(b'abc')) == b'abc'


class TestObjectStore:
    # Tests for hash_object(), the put_* writers and read_object()

    def test_put_blob_uses_bucketed_path(self, temp_repo):
        sha1 = objects.put_blob(temp_repo, b'hello\n')

        path = os.path.join(temp_repo, '.vit', 'objects', sha1[:2], sha1[2:])
        assert os.path.isfile(path)
        with open(path, 'rb') as f:
            assert zlib.decompress(f.read()) == b'blob 6\x00hello\n'

    def test_put_blob_is_idempotent(self, temp_repo, list_objects):
        first = objects.put_blob(temp_repo, b'same content')
        path = objects.object_path(temp_repo, first)
        with open(path, 'rb') as f:
            stored = f.read()

        second = objects.put_blob(temp_repo, b'same content')

        assert first == second
        assert list_objects(temp_repo) == [first]
        with open(path, 'rb') as f:
            assert f.read() == stored

    @pytest.mark.parametrize('writer, obj_type', [
        (objects.put_blob, 'blob'),
        (objects.put_tree, 'tree'),
        (objects.put_commit, 'commit'),
    ])
    def test_typed_writers(self, temp_repo, writer, obj_type):
        sha1 = writer(temp_repo, b'payload')

        assert sha1 == objects.hash_object(temp_repo, b'payload', obj_type, write=False)
        assert objects.read_object(temp_repo, sha1) == (obj_type, b'payload')

    def test_write_false_stores_nothing(self, temp_repo, list_objects):
        sha1 = objects.hash_object(temp_repo, b'not stored', 'blob', write=False)

        assert not objects.object_exists(temp_repo, sha1)
        assert list_objects(temp_repo) == []

    def test_no_temporary_files_left(self, temp_repo):
        sha1 = objects.put_blob(temp_repo, b'data')

        bucket = os.path.dirname(objects.object_path(temp_repo, sha1))
        assert os.listdir(bucket) == [sha1[2:]]

    def test_compression_failure_stores_nothing(self, temp_repo, list_objects, monkeypatch):
        def broken_compress(data):
            raise zlib.error('boom')
        monkeypatch.setattr(objects, 'compress', broken_compress)

        with pytest.raises(zlib.error):
            objects.put_blob(temp_repo, b'data')
        assert list_objects(temp_repo) == []

    def test_read_missing_object(self, temp_repo):
        with pytest.raises(ObjectNotFoundError):
            objects.read_object(temp_repo, '0' * 40)

    def test_read_object_with_bad_length(self, temp_repo):
        sha1 = '1' * 40
        path = objects.object_path(temp_repo, sha1)
        os.makedirs(os.path.dirname(path))
        with open(path, 'wb') as f:
            f.write(zlib.compress(b'blob 10\x00short'))

        with pytest.raises(CorruptObjectError):
            objects.read_object(temp_repo, sha1)
