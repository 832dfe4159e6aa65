"""Editing session orchestration."""

from .service import EditorSession, export_filename

__all__ = ["EditorSession", "export_filename"]
