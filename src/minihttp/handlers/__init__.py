"""
Route backends that touch something outside the process.

    files.py   FileStore: whole-file read/write under --directory
"""

from .files import FileStore

__all__ = ["FileStore"]
