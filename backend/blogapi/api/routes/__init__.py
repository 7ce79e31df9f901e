"""Resource blueprints mounted under the API base prefix."""

from __future__ import annotations

from flask import Blueprint

from .auth import bp as auth_bp
from .comments import bp as comments_bp
from .health import bp as health_bp
from .posts import bp as posts_bp
from .tags import bp as tags_bp
from .users import bp as users_bp

# Each tuple: (blueprint, url_prefix_relative_to_api_base)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /api/health
    (auth_bp, "/auth"),
    (users_bp, ""),  # -> /api/me, /api/users/...
    (posts_bp, "/posts"),
    (comments_bp, "/comments"),
    (tags_bp, "/tags"),
]
