"""Gettext PO catalog editor with AI translation suggestions."""

__version__ = "0.1.0"
