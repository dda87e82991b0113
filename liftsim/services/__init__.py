from .request_source import RandomRequestSource

__all__ = ["RandomRequestSource"]
