"""Platform helpers (filesystem writes)."""

from .files import write_text_once

__all__ = ["write_text_once"]
