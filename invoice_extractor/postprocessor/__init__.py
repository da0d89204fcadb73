"""
Post-Processing Module.

Final clean-up of parsed contact fields:
    - Script-aware text cleaning (Latin and Bangla)
    - Residual label removal
    - Heading-artifact and empty-record filtering
"""

from .sanitizer import FieldSanitizer

__all__ = ['FieldSanitizer']
