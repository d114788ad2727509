"""
TopShot Transaction Generator - Plays

Play metadata records and their validation.
"""

from .metadata import PlayMetadata, PlayMetadataSchema, PlayMetadataValidator

__all__ = [
    'PlayMetadata',
    'PlayMetadataSchema',
    'PlayMetadataValidator',
]
