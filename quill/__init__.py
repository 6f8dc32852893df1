"""Quill blog API."""
