from typing import List

from fastapi import APIRouter

from dependencies import CurrentUser, Posts
from models.post import Comment, CommentCreate, Like, Message, Post, PostCreate

router = APIRouter()


@router.post("", response_model=Post)
def create_post(post_data: PostCreate, posts: Posts, current_user: CurrentUser):
    """Create a post"""
    return posts.create_post(current_user, post_data.text)


@router.get("", response_model=List[Post])
def get_posts(posts: Posts, current_user: CurrentUser):
    """Get all posts, newest first"""
    return posts.list_posts()


@router.get("/{post_id}", response_model=Post)
def get_post(post_id: str, posts: Posts, current_user: CurrentUser):
    """Get post by id"""
    return posts.get_post(post_id)


@router.delete("/{post_id}", response_model=Message)
def delete_post(post_id: str, posts: Posts, current_user: CurrentUser):
    """Delete a post owned by the current user"""
    return posts.delete_post(current_user, post_id)


@router.put("/like/{post_id}", response_model=List[Like])
def like_post(post_id: str, posts: Posts, current_user: CurrentUser):
    return posts.like_post(current_user, post_id)


@router.put("/unlike/{post_id}", response_model=List[Like])
def unlike_post(post_id: str, posts: Posts, current_user: CurrentUser):
    return posts.unlike_post(current_user, post_id)


@router.post("/comment/{post_id}", response_model=List[Comment])
def add_comment(
        post_id: str,
        comment: CommentCreate,
        posts: Posts,
        current_user: CurrentUser
):
    """Comment on a post"""
    return posts.add_comment(current_user, post_id, comment.text)


@router.delete("/comment/{post_id}/{comment_id}", response_model=List[Comment])
def delete_comment(
        post_id: str,
        comment_id: str,
        posts: Posts,
        current_user: CurrentUser
):
    """Delete one of the current user's comments"""
    return posts.delete_comment(current_user, post_id, comment_id)
