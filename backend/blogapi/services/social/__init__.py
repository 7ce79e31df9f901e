from .service import SocialService

__all__ = ["SocialService"]
