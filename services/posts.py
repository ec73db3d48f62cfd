from datetime import datetime, timezone
from typing import Any, Dict, List

from models.user import AuthenticatedUser, UserProfile
from services.errors import (
    AlreadyLikedError,
    CommentNotFoundError,
    NotAuthorizedError,
    NotLikedError,
    PostNotFoundError,
    UserNotFoundError,
)
from services.firestore import FirestoreDB, is_valid_document_id


def _index_of(items: List[Dict[str, Any]], key: str, value: str) -> int:
    """Index of the first item whose key equals value, or -1"""
    for index, item in enumerate(items):
        if item.get(key) == value:
            return index
    return -1


class PostService:
    """Post, like and comment operations on top of the Firestore store"""

    def __init__(self, db: FirestoreDB):
        self.db = db

    def _get_profile(self, caller: AuthenticatedUser) -> UserProfile:
        profile = self.db.get_user_profile(caller.user_id)
        if profile is None:
            raise UserNotFoundError()
        return profile

    @staticmethod
    def _check_post_id(post_id: str):
        if not is_valid_document_id(post_id):
            raise PostNotFoundError()

    def _update(self, post_id: str, mutate) -> Dict[str, Any]:
        self._check_post_id(post_id)
        post = self.db.update_post(post_id, mutate)
        if post is None:
            raise PostNotFoundError()
        return post

    def create_post(self, caller: AuthenticatedUser, text: str) -> Dict[str, Any]:
        """Create a post, snapshotting the author's current name and avatar"""
        profile = self._get_profile(caller)
        return self.db.create_post({
            "user": caller.user_id,
            "name": profile.name,
            "avatar": profile.avatar,
            "text": text,
            "date": datetime.now(timezone.utc),
            "likes": [],
            "comments": [],
        })

    def list_posts(self) -> List[Dict[str, Any]]:
        return self.db.get_all_posts()

    def get_post(self, post_id: str) -> Dict[str, Any]:
        self._check_post_id(post_id)
        post = self.db.get_post(post_id)
        if post is None:
            raise PostNotFoundError()
        return post

    def delete_post(self, caller: AuthenticatedUser, post_id: str):
        self._check_post_id(post_id)

        def check_owner(post):
            if post.get("user") != caller.user_id:
                raise NotAuthorizedError()

        if not self.db.delete_post(post_id, check_owner):
            raise PostNotFoundError()
        return {"msg": "Post removed"}

    def like_post(self, caller: AuthenticatedUser, post_id: str) -> List[Dict[str, Any]]:
        """Add the caller's like to the front of the like list"""

        def add_like(post):
            likes = list(post["likes"])
            if _index_of(likes, "user", caller.user_id) != -1:
                raise AlreadyLikedError()
            likes.insert(0, {"user": caller.user_id})
            return {"likes": likes}

        return self._update(post_id, add_like)["likes"]

    def unlike_post(self, caller: AuthenticatedUser, post_id: str) -> List[Dict[str, Any]]:
        def remove_like(post):
            likes = list(post["likes"])
            index = _index_of(likes, "user", caller.user_id)
            if index == -1:
                raise NotLikedError()
            del likes[index]
            return {"likes": likes}

        return self._update(post_id, remove_like)["likes"]

    def add_comment(self, caller: AuthenticatedUser, post_id: str, text: str) -> List[Dict[str, Any]]:
        """Add a comment to the front of the comment list"""
        self._check_post_id(post_id)
        profile = self._get_profile(caller)
        comment = {
            "id": self.db.new_comment_id(),
            "user": caller.user_id,
            "name": profile.name,
            "avatar": profile.avatar,
            "text": text,
            "date": datetime.now(timezone.utc),
        }

        def insert_comment(post):
            return {"comments": [comment] + list(post["comments"])}

        return self._update(post_id, insert_comment)["comments"]

    def delete_comment(
            self,
            caller: AuthenticatedUser,
            post_id: str,
            comment_id: str
    ) -> List[Dict[str, Any]]:
        """Remove a comment by its own ID; only its author may do this"""

        def remove_comment(post):
            comments = list(post["comments"])
            index = _index_of(comments, "id", comment_id)
            if index == -1:
                raise CommentNotFoundError()
            if comments[index].get("user") != caller.user_id:
                raise NotAuthorizedError()
            del comments[index]
            return {"comments": comments}

        return self._update(post_id, remove_comment)["comments"]
