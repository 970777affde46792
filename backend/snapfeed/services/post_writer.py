"""Post Writer — create and partially update posts with their tags and tagged users.

Invariants:
    - Author is always the authenticated caller; only the author may update
    - The image is decoded before anything is added to the session: a bad image
      leaves no Post row behind
    - Post row + tag upserts + join rows commit in ONE transaction
    - Tags are upserted by text (INSERT ... ON CONFLICT DO NOTHING, then SELECT ids)
    - Unknown tagged usernames are silently dropped, never an error
    - Update touches only keys present in the request; a present `tags` or
      `user_tags` key deletes ALL existing join rows and inserts the new set

Design Decisions:
    - Join rows written with Core DELETE/INSERT instead of ORM collection
      assignment: assignment would diff old vs new sets and keep unchanged rows
"""

import logging

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.core.domain_types import PostId, TagId, UserId
from snapfeed.core.errors import ForbiddenError
from snapfeed.core.image_payload import decode_image
from snapfeed.core.post_references import normalize_references
from snapfeed.infrastructure.database import insert_ignore
from snapfeed.models.post import Post, post_tagged_users, post_tags
from snapfeed.models.tag import Tag
from snapfeed.models.user import User
from snapfeed.services.lookups import get_post_or_404

logger = logging.getLogger(__name__)


class PostWriter:
    """Write path for posts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        author_id: UserId,
        image: str | None,
        description: str | None = None,
        tags: list[str] | None = None,
        user_tags: list[str] | None = None,
    ) -> Post:
        decoded = decode_image(image)

        post = Post(
            author_id=author_id,
            description=description,
            image=decoded.data,
            image_content_type=decoded.content_type,
        )
        self.db.add(post)
        await self.db.flush()

        await self._replace_tags(PostId(post.id), tags)
        await self._replace_tagged_users(PostId(post.id), user_tags)
        await self.db.commit()

        logger.info(
            "Post created", extra={"user_id": author_id, "post_id": post.id},
        )
        return await get_post_or_404(self.db, PostId(post.id), with_references=True)

    async def update(
        self, post_id: PostId, editor_id: UserId, changes: dict,
    ) -> Post:
        """Apply a partial update. `changes` holds only the keys the client sent."""
        post = await get_post_or_404(self.db, post_id)
        if post.author_id != editor_id:
            raise ForbiddenError("Only the author can update a post")

        if "description" in changes:
            post.description = changes["description"]
        if "tags" in changes:
            await self._replace_tags(post_id, changes["tags"])
        if "user_tags" in changes:
            await self._replace_tagged_users(post_id, changes["user_tags"])
        await self.db.commit()

        logger.info(
            f"Post updated ({', '.join(sorted(changes)) or 'no fields'})",
            extra={"user_id": editor_id, "post_id": post_id},
        )
        return await get_post_or_404(self.db, post_id, with_references=True)

    # ─── Join-table writes ──────────────────────────────────────

    async def _replace_tags(self, post_id: PostId, texts: list[str] | None) -> None:
        await self.db.execute(delete(post_tags).where(post_tags.c.post_id == post_id))
        tag_ids = await self._upsert_tags(normalize_references(texts))
        if tag_ids:
            await self.db.execute(
                insert(post_tags),
                [{"post_id": post_id, "tag_id": tag_id} for tag_id in tag_ids],
            )

    async def _replace_tagged_users(
        self, post_id: PostId, usernames: list[str] | None,
    ) -> None:
        await self.db.execute(
            delete(post_tagged_users).where(post_tagged_users.c.post_id == post_id),
        )
        user_ids = await self._resolve_usernames(normalize_references(usernames))
        if user_ids:
            await self.db.execute(
                insert(post_tagged_users),
                [{"post_id": post_id, "user_id": user_id} for user_id in user_ids],
            )

    async def _upsert_tags(self, texts: list[str]) -> list[TagId]:
        if not texts:
            return []
        result = await self.db.execute(
            insert_ignore(self.db, Tag.__table__, ["text"]).values(
                [{"text": text} for text in texts],
            ),
        )
        logger.debug(f"Tag upsert: {result.rowcount} new of {len(texts)}")
        rows = await self.db.execute(select(Tag.id).where(Tag.text.in_(texts)))
        return [TagId(tag_id) for tag_id in rows.scalars()]

    async def _resolve_usernames(self, usernames: list[str]) -> list[UserId]:
        """Existing users only; unknown names fall out of the IN filter."""
        if not usernames:
            return []
        rows = await self.db.execute(
            select(User.id).where(User.username.in_(usernames)),
        )
        return [UserId(user_id) for user_id in rows.scalars()]
