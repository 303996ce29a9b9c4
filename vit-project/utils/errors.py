# What it does: Defines the error types raised by the Vit core
# How it does: Every failure the core reports on purpose is a subclass of `VitError`, so the command layer can tell a Vit condition apart from a raw OS or zlib error. A missing file during `add` is its own type because it is the one error that is downgraded to a warning

import os

class VitError(Exception):
    """Base class for every error raised deliberately by Vit."""
    message = "vit error"

    def __init__(self, message=None):
        super().__init__(message or self.message)

class RepositoryExistsError(VitError):
    message = "Vit repository already exists in this directory"

class NotARepositoryError(VitError):
    message = "not a vit repository (or any of the parent directories): .vit"

class NoChangesToCommitError(VitError):
    message = "No changes to commit"

class InvalidIndexFormatError(VitError):
    message = "Invalid index file format"

class PathspecError(VitError, FileNotFoundError):
    # Non-fatal during a multi-file add
    def __init__(self, path):
        self.path = path
        super().__init__(f"'{path}' does not exist")

class ObjectNotFoundError(VitError, FileNotFoundError):
    def __init__(self, sha1):
        self.sha1 = sha1
        super().__init__(f"Object not found: {sha1}")

class CorruptObjectError(VitError):
    message = "Corrupt object"

class OutsideRepositoryError(VitError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"'{path}' is outside repository")

class InvalidPathError(VitError):
    # The index stores paths as UTF-8
    def __init__(self, path):
        self.path = path
        super().__init__(f"{os.fsencode(path)!r} is not a valid UTF-8 path")
