from typing import Optional


class PostServiceError(Exception):
    """Base class for errors that are reported to the caller"""
    status_code = 500
    message = "Server error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NotFoundError(PostServiceError):
    status_code = 404
    message = "Not found"


class PostNotFoundError(NotFoundError):
    message = "Post not found"


class CommentNotFoundError(NotFoundError):
    message = "Comment does not exist"


class UserNotFoundError(NotFoundError):
    message = "User not found"


class NotAuthorizedError(PostServiceError):
    """Caller does not own the resource it tries to change"""
    status_code = 401
    message = "User not authorized"


class ConflictError(PostServiceError):
    status_code = 400
    message = "Conflict"


class AlreadyLikedError(ConflictError):
    message = 'Post already "liked"'


class NotLikedError(ConflictError):
    message = 'Post has not been "liked"'
