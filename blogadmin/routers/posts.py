import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from blogadmin import dependencies as deps
from blogadmin.repos.table_posts_repo import TablePostsRepo
from blogadmin.schemas.blog import TablePost, TablePostIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/posts", response_model=List[TablePost])
def list_posts(repo: TablePostsRepo = Depends(deps.get_table_posts_repo)):
    """All table posts, newest first."""
    try:
        return repo.list()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.post("/posts", response_model=TablePost, status_code=201)
def create_post(
    data: TablePostIn, repo: TablePostsRepo = Depends(deps.get_table_posts_repo)
):
    try:
        return repo.create(data)
    except Exception as e:
        logger.error(f"Unexpected error creating post {data.slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to create post")


@router.get("/posts/{post_id}", response_model=TablePost)
def get_post(post_id: int, repo: TablePostsRepo = Depends(deps.get_table_posts_repo)):
    try:
        post = repo.read(post_id)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.put("/posts/{post_id}", response_model=TablePost)
def update_post(
    post_id: int,
    data: TablePostIn,
    repo: TablePostsRepo = Depends(deps.get_table_posts_repo),
):
    try:
        post = repo.update(post_id, data)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error updating post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update post")


@router.delete("/posts/{post_id}", status_code=204)
def delete_post(post_id: int, repo: TablePostsRepo = Depends(deps.get_table_posts_repo)):
    try:
        repo.delete(post_id)
    except Exception as e:
        logger.error(f"Unexpected error deleting post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete post")
    return Response(status_code=204)
