from .dto import PostCreateIn, PostListIn, PostStatsOut, PostUpdateIn
from .service import PostService

__all__ = ["PostCreateIn", "PostListIn", "PostService", "PostStatsOut", "PostUpdateIn"]
