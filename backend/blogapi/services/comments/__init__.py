from .dto import CommentCreateIn, CommentUpdateIn
from .service import CommentService

__all__ = ["CommentCreateIn", "CommentService", "CommentUpdateIn"]
