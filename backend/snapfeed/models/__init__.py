"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the identity root; follow edges, posts, likes, comments and tokens reference it

Design Decisions:
    - One file per entity for locality; join tables live beside Post, their only owner
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from snapfeed.models.user import User  # noqa: F401
from snapfeed.models.user_following import UserFollowing  # noqa: F401
from snapfeed.models.tag import Tag  # noqa: F401
from snapfeed.models.post import Post, post_tags, post_tagged_users  # noqa: F401
from snapfeed.models.like import Like  # noqa: F401
from snapfeed.models.comment import Comment  # noqa: F401
from snapfeed.models.auth_token import AuthToken  # noqa: F401
