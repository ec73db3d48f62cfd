import copy
import threading
import uuid
from collections import defaultdict

import pytest
from fastapi.testclient import TestClient

from dependencies import get_post_service
from main import app
from models.user import AuthenticatedUser, UserProfile
from services.posts import PostService


class InMemoryFirestoreDB:
    """Stand-in for FirestoreDB; a per-post lock plays the role of a transaction"""

    def __init__(self, users=None):
        self.users = copy.deepcopy(users or {})
        self.posts = {}
        self.writes = 0
        self._locks = defaultdict(threading.Lock)
        self._locks_guard = threading.Lock()

    def _lock(self, post_id):
        with self._locks_guard:
            return self._locks[post_id]

    @staticmethod
    def _to_post(post_id, doc):
        post = copy.deepcopy(doc)
        post["id"] = post_id
        post.setdefault("likes", [])
        post.setdefault("comments", [])
        return post

    @staticmethod
    def new_comment_id():
        return uuid.uuid4().hex

    def close(self):
        pass

    def get_user_profile(self, user_id):
        data = self.users.get(user_id)
        if data is None:
            return None
        return UserProfile(id=user_id, name=data.get("name"), avatar=data.get("avatar"))

    def get_all_posts(self):
        posts = [self._to_post(post_id, doc) for post_id, doc in self.posts.items()]
        return sorted(posts, key=lambda post: post["date"], reverse=True)

    def get_post(self, post_id):
        doc = self.posts.get(post_id)
        return None if doc is None else self._to_post(post_id, doc)

    def create_post(self, data):
        post_id = uuid.uuid4().hex[:20]
        self.posts[post_id] = copy.deepcopy(data)
        self.writes += 1
        return {**data, "id": post_id}

    def update_post(self, post_id, mutate):
        with self._lock(post_id):
            doc = self.posts.get(post_id)
            if doc is None:
                return None
            post = self._to_post(post_id, doc)
            updates = mutate(post)
            doc.update(copy.deepcopy(updates))
            self.writes += 1
            post.update(updates)
            return post

    def delete_post(self, post_id, guard):
        with self._lock(post_id):
            doc = self.posts.get(post_id)
            if doc is None:
                return False
            guard(self._to_post(post_id, doc))
            del self.posts[post_id]
            self.writes += 1
            return True


USERS = {
    "alice": {"name": "Alice", "avatar": "https://example.com/alice.png", "password": "hash-a"},
    "bob": {"name": "Bob", "avatar": "https://example.com/bob.png", "password": "hash-b"},
    "carol": {"name": "Carol", "avatar": "https://example.com/carol.png", "password": "hash-c"},
}


@pytest.fixture
def store():
    return InMemoryFirestoreDB(users=USERS)


@pytest.fixture
def service(store):
    return PostService(store)


@pytest.fixture
def alice():
    return AuthenticatedUser(user_id="alice", email="alice@example.com")


@pytest.fixture
def bob():
    return AuthenticatedUser(user_id="bob", email="bob@example.com")


@pytest.fixture
def carol():
    return AuthenticatedUser(user_id="carol", email="carol@example.com")


def fake_verify_id_token(token, check_revoked=False, clock_skew_seconds=0):
    """Accepts tokens of the form 'token-<uid>'"""
    if not token.startswith("token-"):
        raise ValueError("malformed token")
    uid = token[len("token-"):]
    return {"uid": uid, "email": f"{uid}@example.com"}


@pytest.fixture
def auth():
    """Build request headers carrying a token for the given uid"""
    def headers(user_id):
        return {"Authorization": f"Bearer token-{user_id}"}
    return headers


@pytest.fixture
def client(service, monkeypatch):
    monkeypatch.setattr("dependencies.verify_id_token", fake_verify_id_token)
    app.dependency_overrides[get_post_service] = lambda: service
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
