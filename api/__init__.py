from .youtube import fetch_youtube

__all__ = ["fetch_youtube"]
