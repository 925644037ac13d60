"""
=============================================================================
FILE STORE
=============================================================================

Reads and writes whole files under the directory given with --directory.
Backs the /files/{name} routes:

    GET  /files/notes.txt   →  FileStore.read("notes.txt")
    POST /files/notes.txt   →  FileStore.write("notes.txt", body)

=============================================================================
PATH TRAVERSAL
=============================================================================

The name comes straight from the request path, so it can be hostile:

    GET /files/../../etc/passwd
    GET /files//etc/passwd          (absolute after the prefix)

resolve() joins the name under the root, normalizes it (following ".."
and symlinks), and checks the result is still inside the root. Anything
that escapes raises ForbiddenPath, which the server answers with 403.

    root:      /srv/data
    name:      ../../etc/passwd
    resolved:  /etc/passwd          → not under /srv/data → 403

=============================================================================
CONCURRENCY
=============================================================================

Nothing here is locked. Two connections writing the same name race at
the filesystem level and the last write wins.

=============================================================================
"""

import logging
from pathlib import Path
from typing import Optional

from ..http.errors import FilesystemFailure, ForbiddenPath

logger = logging.getLogger(__name__)


class FileStore:
    """
    Whole-file access confined to one root directory.

    Usage:
        store = FileStore("/tmp/data")
        store.write("hello.txt", b"hi")
        store.read("hello.txt")      # b"hi"
        store.read("missing.txt")    # None
    """

    def __init__(self, directory: str):
        """
        Args:
            directory: Root directory. Every name is resolved inside it.
        """
        # Resolve once so the containment check compares absolute paths
        self.root = Path(directory).resolve()

    def resolve(self, name: str) -> Path:
        """
        Map a request name to a filesystem path inside the root.

        Raises:
            ForbiddenPath: The name resolves outside the root, or is not
                a usable path at all (e.g. contains a NUL byte).
        """
        try:
            full_path = (self.root / name).resolve()
        except (ValueError, OSError) as e:
            logger.warning(f"Unusable file name {name!r}: {e}")
            raise ForbiddenPath(f"Access denied: {name!r}") from e
        try:
            full_path.relative_to(self.root)
        except ValueError:
            logger.warning(f"Path traversal attempt: {name!r}")
            raise ForbiddenPath(f"Access denied: {name}")
        return full_path

    def read(self, name: str) -> Optional[bytes]:
        """
        Read a whole file.

        Returns:
            The file's bytes, or None if it does not exist or is not a
            regular file.

        Raises:
            ForbiddenPath: The name escapes the root.
            FilesystemFailure: The file exists but could not be read.
        """
        path = self.resolve(name)
        if not path.is_file():
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            logger.error(f"Error reading file {path}: {e}")
            raise FilesystemFailure("Failed to read file") from e

    def write(self, name: str, data: bytes) -> Path:
        """
        Create or overwrite a file with exactly `data`.

        Parent directories are not created.

        Returns:
            The path that was written.

        Raises:
            ForbiddenPath: The name escapes the root.
            FilesystemFailure: The write failed.
        """
        path = self.resolve(name)
        try:
            path.write_bytes(data)
        except OSError as e:
            logger.error(f"Error writing file {path}: {e}")
            raise FilesystemFailure("Failed to write file") from e
        logger.debug(f"Wrote {len(data)} bytes to {path}")
        return path
