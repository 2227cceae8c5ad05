"""Services exposed to the remote host and their FastAPI transport."""

from .app import create_app, run_service
from .content_reader import ContentReader
from .file_system import FileAccessService

__all__ = ["ContentReader", "FileAccessService", "create_app", "run_service"]
