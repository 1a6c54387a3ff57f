"""Adapters for the external extraction tool."""

from .extraction_base import Extractor
from .extraction_ytdlp import YtDlpExtractor

__all__ = ["Extractor", "YtDlpExtractor"]
