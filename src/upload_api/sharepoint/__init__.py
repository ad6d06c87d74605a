"""SharePoint document library access through Microsoft Graph."""

from .resolver import SharePointResolver

__all__ = ['SharePointResolver']
