import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from blogadmin import dependencies as deps
from blogadmin.errors import (
    AuthError,
    BlogAdminError,
    ConflictError,
    RemoteError,
    TransportError,
    ValidationError,
)
from blogadmin.repos.github_posts_repo import GitHubPostsRepo
from blogadmin.schemas.blog import (
    FileRef,
    Post,
    PostDraft,
    PostUpdate,
    PreviewRequest,
    PreviewResponse,
)
from blogadmin.services.markdown_renderer import MarkdownRenderer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin")

ERROR_STATUS = {
    ValidationError: 422,
    AuthError: 401,
    ConflictError: 409,
    RemoteError: 502,
    TransportError: 504,
}


def to_http_error(error: BlogAdminError) -> HTTPException:
    if isinstance(error, RemoteError) and error.status_code == 404:
        return HTTPException(status_code=404, detail=str(error))
    status = next(
        (code for cls, code in ERROR_STATUS.items() if isinstance(error, cls)), 500
    )
    return HTTPException(status_code=status, detail=str(error))


@router.get("/posts", response_model=List[FileRef])
def list_posts(store: GitHubPostsRepo = Depends(deps.get_posts_store)):
    """Content files in the posts directory with their current revision."""
    try:
        return store.list()
    except BlogAdminError as e:
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"Unexpected error listing repository posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{filename}", response_model=Post)
def read_post(filename: str, store: GitHubPostsRepo = Depends(deps.get_posts_store)):
    try:
        return store.read(store.ref_for(filename))
    except BlogAdminError as e:
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"Unexpected error reading {filename}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.post("/posts", response_model=Post, status_code=201)
def create_post(
    draft: PostDraft, store: GitHubPostsRepo = Depends(deps.get_posts_store)
):
    try:
        return store.create(draft)
    except BlogAdminError as e:
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"Unexpected error creating post: {e}")
        raise HTTPException(status_code=500, detail="Failed to save post")


@router.put("/posts/{filename}", response_model=Post)
def update_post(
    filename: str,
    update: PostUpdate,
    store: GitHubPostsRepo = Depends(deps.get_posts_store),
):
    """Rewrite an existing file. Title changes keep the original filename."""
    draft = PostDraft(title=update.title, body=update.body, tags_text=update.tags_text)
    try:
        return store.update(store.ref_for(filename, update.sha), draft)
    except BlogAdminError as e:
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"Unexpected error updating {filename}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save post")


@router.delete("/posts/{filename}", status_code=204)
def delete_post(
    filename: str,
    sha: str = Query(..., min_length=1),
    store: GitHubPostsRepo = Depends(deps.get_posts_store),
):
    try:
        store.delete(store.ref_for(filename, sha))
    except BlogAdminError as e:
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"Unexpected error deleting {filename}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete post")
    return Response(status_code=204)


@router.post("/preview", response_model=PreviewResponse)
def preview(
    request: PreviewRequest,
    renderer: MarkdownRenderer = Depends(deps.get_markdown_renderer),
):
    try:
        return PreviewResponse(html=renderer.render(request.text, mode=request.mode))
    except BlogAdminError as e:
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"Unexpected error rendering preview: {e}")
        raise HTTPException(status_code=500, detail="Failed to render preview")
