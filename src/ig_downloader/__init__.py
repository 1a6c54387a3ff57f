"""ig-downloader: fetch social-media videos with yt-dlp and serve them from R2."""

__version__ = "0.1.0"
