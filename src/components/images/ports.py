"""
Images component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class UploadRulesPort(Protocol):
    """Upload limits, normally read from rules.yaml."""

    def get_max_upload_bytes(self) -> int:
        ...

    def get_allowed_mime_types(self) -> list[str]:
        ...
