"""Object-store adapters and key conventions."""
