"""zipupdate: filter members of zip archives through a shell command, in place."""

from .archive import update_archive, update_archives
from .filtering import filter_bytes

__all__ = ["__version__", "filter_bytes", "update_archive", "update_archives"]

__version__ = "0.1.0"
