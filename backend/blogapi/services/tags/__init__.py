from .service import TagService

__all__ = ["TagService"]
