import logging
import re
import uuid
from typing import Any, Callable, Dict, List, Optional

import firebase_admin
from firebase_admin import firestore as fs
from google.cloud import firestore

from models.user import UserProfile

MAX_DOCUMENT_ID_BYTES = 1500
_RESERVED_ID = re.compile(r"^__.*__$")


def is_valid_document_id(document_id: Any) -> bool:
    """Check a value against Firestore's document id rules"""
    if not isinstance(document_id, str) or not document_id:
        return False
    if document_id in (".", "..") or "/" in document_id:
        return False
    if _RESERVED_ID.match(document_id):
        return False
    return len(document_id.encode("utf-8")) <= MAX_DOCUMENT_ID_BYTES


class FirestoreDB:
    def __init__(
            self,
            app: firebase_admin.App,
            posts_collection: str = "posts",
            users_collection: str = "users"
    ):
        self.db = fs.client(app)
        self.posts_collection = posts_collection
        self.users_collection = users_collection

    def close(self):
        """Release the underlying gRPC channel"""
        self.db.close()

    def collection(self, name: str):
        return self.db.collection(name)

    @staticmethod
    def _to_post(snapshot) -> Dict[str, Any]:
        post = snapshot.to_dict() or {}
        post["id"] = snapshot.id
        post.setdefault("likes", [])
        post.setdefault("comments", [])
        return post

    @staticmethod
    def new_comment_id() -> str:
        """Embedded comments have no native document id, so mint one"""
        return uuid.uuid4().hex

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        """Get a user's public profile, or None if the user has no record"""
        if not is_valid_document_id(user_id):
            return None
        snapshot = self.collection(self.users_collection).document(user_id).get(
            field_paths=["name", "avatar"]
        )
        if not snapshot.exists:
            return None
        data = snapshot.to_dict() or {}
        return UserProfile(id=user_id, name=data.get("name"), avatar=data.get("avatar"))

    def get_all_posts(self) -> List[Dict[str, Any]]:
        """Get all posts sorted by creation date descending"""
        posts_ref = self.collection(self.posts_collection).order_by(
            "date", direction=firestore.Query.DESCENDING
        ).stream()
        return [self._to_post(doc) for doc in posts_ref]

    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        """Get a post by ID"""
        snapshot = self.collection(self.posts_collection).document(post_id).get()
        if not snapshot.exists:
            return None
        return self._to_post(snapshot)

    def create_post(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new post and return it with its generated ID"""
        new_post_ref = self.collection(self.posts_collection).document()
        new_post_ref.set(data)
        logging.info("Created post %s for user %s", new_post_ref.id, data.get("user"))
        return {**data, "id": new_post_ref.id}

    def update_post(
            self,
            post_id: str,
            mutate: Callable[[Dict[str, Any]], Dict[str, Any]]
    ) -> Optional[Dict[str, Any]]:
        """
        Read-modify-write a post inside a transaction

        Args:
            post_id: The ID of the post to change
            mutate: Receives the current post and returns the fields to write.
                Any exception it raises rolls the transaction back.

        Returns:
            The post with the written fields applied, or None if it does not exist
        """
        post_ref = self.collection(self.posts_collection).document(post_id)
        transaction = self.db.transaction()

        @firestore.transactional
        def update_in_transaction(transaction, post_ref):
            snapshot = post_ref.get(transaction=transaction)
            if not snapshot.exists:
                return None

            post = self._to_post(snapshot)
            updates = mutate(post)
            transaction.update(post_ref, updates)
            post.update(updates)
            return post

        return update_in_transaction(transaction, post_ref)

    def delete_post(self, post_id: str, guard: Callable[[Dict[str, Any]], None]) -> bool:
        """
        Delete a post inside a transaction once guard(post) has passed.
        Returns False if the post does not exist.
        """
        post_ref = self.collection(self.posts_collection).document(post_id)
        transaction = self.db.transaction()

        @firestore.transactional
        def delete_in_transaction(transaction, post_ref):
            snapshot = post_ref.get(transaction=transaction)
            if not snapshot.exists:
                return False

            guard(self._to_post(snapshot))
            transaction.delete(post_ref)
            return True

        deleted = delete_in_transaction(transaction, post_ref)
        if deleted:
            logging.info("Deleted post %s", post_id)
        return deleted
