from .fetch import MIME_RSS_XML, fetch_remote

__all__ = ["MIME_RSS_XML", "fetch_remote"]
