"""
Images component - post thumbnail and inline image upload.
"""

from .component import (
    PLACEHOLDER_SCOPE,
    ImageUploader,
    generate_storage_key,
    guess_extension,
)
from .models import UploadedImage, UploadImageInput
from .ports import UploadRulesPort

__all__ = [
    # Component
    "ImageUploader",
    "PLACEHOLDER_SCOPE",
    "generate_storage_key",
    "guess_extension",
    # Models
    "UploadImageInput",
    "UploadedImage",
    # Ports
    "UploadRulesPort",
]
