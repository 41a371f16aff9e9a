from poker.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
