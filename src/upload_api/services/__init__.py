"""
Upload API batch services.

Process a list of files one at a time, isolating failures per file.
"""

from .batch import process_direct_uploads, process_sharepoint_references

__all__ = ['process_direct_uploads', 'process_sharepoint_references']
