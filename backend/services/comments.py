"""
Task comment workflow.

Comments form threads through ``parent_id``. A comment that still has
replies is never removed: deleting it hides its text and sets
``is_deleted`` so the replies keep their place in the thread. A comment
without replies is removed outright.
"""

import logging
from dataclasses import replace

from core.domain.comment import DEFAULT_MAX_CONTENT_LENGTH, Comment, normalize_content
from core.exceptions import BadRequestError, NotFoundError, PermissionDeniedError
from core.interfaces.repositories import (
    CommentRepository,
    TaskRepository,
    UnitOfWork,
    UserRepository,
)

logger = logging.getLogger(__name__)

DEFAULT_DELETED_PLACEHOLDER = "[deleted]"


def build_comment_tree(comments: list[Comment], deleted_placeholder: str) -> list[Comment]:
    """
    Arrange a flat, oldest-first list of comments into threads.

    Returns copies of the top-level comments with ``replies`` filled in
    recursively; every level keeps creation order. Soft-deleted comments stay
    in the tree with their content replaced by ``deleted_placeholder``.
    Replies whose parent is not in the list are left out.
    """
    nodes: dict[str, Comment] = {}
    for comment in comments:
        nodes[comment.id] = replace(
            comment,
            content=comment.display_content(deleted_placeholder),
            replies=[],
        )

    roots: list[Comment] = []
    for comment in comments:
        node = nodes[comment.id]
        if node.parent_id is None:
            roots.append(node)
        elif node.parent_id in nodes:
            nodes[node.parent_id].replies.append(node)

    return roots


class CommentService:
    """Create, edit, delete and list the comments of a task."""

    def __init__(
        self,
        comments: CommentRepository,
        tasks: TaskRepository,
        users: UserRepository,
        uow: UnitOfWork,
        max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH,
        deleted_placeholder: str = DEFAULT_DELETED_PLACEHOLDER,
    ):
        self._comments = comments
        self._tasks = tasks
        self._users = users
        self._uow = uow
        self._max_content_length = max_content_length
        self._deleted_placeholder = deleted_placeholder

    async def create_comment(
        self,
        task_id: str,
        user_id: str,
        content: str,
        parent_id: str | None = None,
    ) -> Comment:
        """
        Add a comment (or a reply, when ``parent_id`` is given) to a task.

        Raises:
            NotFoundError: task or user does not exist
            BadRequestError: empty/oversized content, or the parent comment
                does not exist under the same task
        """
        task = await self._tasks.get_by_id(task_id)
        if task is None:
            raise NotFoundError("Task not found")

        user = await self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        if parent_id is not None:
            parent = await self._comments.get_in_task(parent_id, task_id)
            if parent is None:
                raise BadRequestError(
                    "Parent comment not found or does not belong to this task"
                )

        comment = Comment(
            task_id=task_id,
            user_id=user_id,
            content=normalize_content(content, self._max_content_length),
            parent_id=parent_id,
            is_deleted=False,
        )
        saved = await self._comments.add(comment)
        await self._uow.commit()

        saved.author_name = user.name
        logger.info(
            "Comment %s created on task %s (reply to %s)",
            saved.id,
            task_id,
            parent_id,
            extra={"task_id": task_id, "user_id": user_id},
        )
        return saved

    async def get_comment(self, comment_id: str) -> Comment:
        comment = await self._comments.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        comment.content = comment.display_content(self._deleted_placeholder)
        return comment

    async def update_comment(self, comment_id: str, user_id: str, content: str) -> Comment:
        """
        Replace the text of a comment. Only its author may do so.

        Raises:
            NotFoundError: comment does not exist
            PermissionDeniedError: caller is not the author
            BadRequestError: comment was deleted, or content is invalid
        """
        comment = await self._comments.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")

        if comment.user_id != user_id:
            logger.warning(
                "User %s tried to edit comment %s owned by %s",
                user_id,
                comment_id,
                comment.user_id,
            )
            raise PermissionDeniedError("You can only edit your own comments")

        if not comment.can_be_edited_by(user_id):
            raise BadRequestError("Deleted comments cannot be edited")

        comment.update_content(content, self._max_content_length)
        updated = await self._comments.update(comment)
        await self._uow.commit()

        logger.info("Comment %s updated", comment_id, extra={"user_id": user_id})
        return updated

    async def delete_comment(self, comment_id: str, user_id: str) -> bool:
        """
        Delete a comment authored by ``user_id``.

        Soft-deletes when the comment has replies, hard-deletes otherwise.
        After a hard delete, soft-deleted ancestors left without replies are
        removed as well.

        Returns:
            True if the comment was soft-deleted, False if it was removed.

        Raises:
            NotFoundError: comment does not exist
            PermissionDeniedError: caller is not the author
            BadRequestError: comment was already deleted
        """
        comment = await self._comments.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")

        if comment.user_id != user_id:
            logger.warning(
                "User %s tried to delete comment %s owned by %s",
                user_id,
                comment_id,
                comment.user_id,
            )
            raise PermissionDeniedError("You can only delete your own comments")

        if not comment.can_be_deleted_by(user_id):
            raise BadRequestError("Comment has already been deleted")

        if await self._comments.count_replies(comment.id) > 0:
            comment.mark_as_deleted(self._deleted_placeholder)
            await self._comments.update(comment)
            soft_deleted = True
        else:
            await self._comments.delete(comment.id)
            await self._prune_deleted_ancestors(comment.parent_id)
            soft_deleted = False

        await self._uow.commit()

        logger.info(
            "Comment %s %s",
            comment_id,
            "soft-deleted" if soft_deleted else "deleted",
            extra={"task_id": comment.task_id, "user_id": user_id},
        )
        return soft_deleted

    async def list_comments(self, task_id: str) -> list[Comment]:
        """
        Threaded comments of a task, oldest first at every level.

        An unknown task yields an empty list rather than an error so task
        views keep rendering.
        """
        task = await self._tasks.get_by_id(task_id)
        if task is None:
            logger.warning("Task %s not found, returning empty comments", task_id)
            return []

        comments = await self._comments.list_by_task(task_id)
        return build_comment_tree(comments, self._deleted_placeholder)

    async def _prune_deleted_ancestors(self, parent_id: str | None) -> None:
        while parent_id is not None:
            parent = await self._comments.get_by_id(parent_id)
            if parent is None or not parent.is_deleted:
                return
            if await self._comments.count_replies(parent.id) > 0:
                return
            await self._comments.delete(parent.id)
            logger.debug("Removed soft-deleted comment %s with no replies left", parent.id)
            parent_id = parent.parent_id
