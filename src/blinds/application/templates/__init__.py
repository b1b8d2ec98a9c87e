"""Bundled product configuration templates.

This package provides template configurations for common blind types and a
TemplateManager class for accessing them.
"""

from blinds.application.templates.manager import (
    TEMPLATE_METADATA,
    TemplateManager,
    TemplateNotFoundError,
)

__all__ = [
    "TEMPLATE_METADATA",
    "TemplateManager",
    "TemplateNotFoundError",
]
