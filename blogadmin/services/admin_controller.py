"""
Session-scoped admin workflow over the file-backed post store.

State flow::

    UNAUTHENTICATED -> AUTHENTICATING -> BROWSING <-> EDITING / CREATING

Every store error is caught here and surfaced through ``error``; the session
always lands back in its previous stable state and keeps the draft so the user
can retry.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional

from blogadmin.errors import AuthError, BlogAdminError
from blogadmin.repos.github_posts_repo import GitHubPostsRepo, validate_draft
from blogadmin.schemas.blog import FileRef, PostDraft
from blogadmin.services.markdown_renderer import MarkdownRenderer

logger = logging.getLogger(__name__)


class AdminState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    BROWSING = "browsing"
    EDITING = "editing"
    CREATING = "creating"


def apply_change(draft: PostDraft, field: str, value: str) -> PostDraft:
    """Return a copy of the draft with one form field replaced."""
    if field not in PostDraft.model_fields:
        raise ValueError(f"Unknown draft field: {field}")
    return draft.model_copy(update={field: value})


class AdminController:
    def __init__(
        self,
        store_factory: Callable[[str], GitHubPostsRepo],
        renderer_factory: Optional[Callable[[str], MarkdownRenderer]] = None,
    ):
        self.store_factory = store_factory
        self.renderer_factory = renderer_factory
        self.store: Optional[GitHubPostsRepo] = None
        self.renderer: Optional[MarkdownRenderer] = None

        self.state = AdminState.UNAUTHENTICATED
        self.username = ""
        self.posts: List[FileRef] = []
        self.editing: Optional[FileRef] = None
        self.draft = PostDraft()
        self.preview = ""
        self.preview_html = ""
        self.error = ""
        self.message = ""

    @property
    def is_creating(self) -> bool:
        return self.editing is None

    def login(self, token: str) -> bool:
        if self.store is not None:
            self.logout()
        self._clear_feedback()
        self.state = AdminState.AUTHENTICATING
        store = self.store_factory(token)
        try:
            self.username = store.whoami()
        except BlogAdminError as e:
            store.close()
            self.state = AdminState.UNAUTHENTICATED
            self._fail("login", e)
            return False

        self.store = store
        if self.renderer_factory:
            self.renderer = self.renderer_factory(token)
        logger.info(f"Admin session started for {self.username}")
        self._back_to_browsing()
        self.refresh()
        return True

    def logout(self) -> None:
        if self.store:
            self.store.close()
        if self.renderer:
            self.renderer.close()
        self.store = None
        self.renderer = None
        self.username = ""
        self.posts = []
        self._reset_draft()
        self._clear_feedback()
        self.state = AdminState.UNAUTHENTICATED

    def refresh(self) -> bool:
        try:
            self.posts = self._require_store().list()
        except BlogAdminError as e:
            self._fail("list posts", e)
            return False
        return True

    def new_post(self) -> None:
        if self.state == AdminState.UNAUTHENTICATED:
            self._fail("start a post", AuthError("Log in first"))
            return
        self._clear_feedback()
        self._reset_draft()
        self.state = AdminState.CREATING

    def edit(self, ref: FileRef) -> bool:
        self._clear_feedback()
        try:
            post = self._require_store().read(ref)
        except BlogAdminError as e:
            self._fail(f"load {ref.filename}", e)
            return False

        self.editing = FileRef(filename=post.filename, sha=post.sha, url=ref.url)
        self.draft = PostDraft(
            title=post.title, body=post.body, tags_text=", ".join(post.tags)
        )
        self.preview = post.body
        self.preview_html = ""
        self.state = AdminState.EDITING
        return True

    def change(self, field: str, value: str) -> None:
        self.draft = apply_change(self.draft, field, value)
        if field == "body":
            self.preview = value
        if self.state == AdminState.BROWSING:
            self.state = AdminState.CREATING

    def save(self) -> bool:
        self._clear_feedback()
        try:
            store = self._require_store()
            validate_draft(self.draft)
            if self.editing is not None:
                post = store.update(self.editing, self.draft)
            else:
                post = store.create(self.draft)
        except BlogAdminError as e:
            self._fail("save post", e)
            return False

        self._back_to_browsing()
        self.message = f"Saved {post.filename}"
        self.refresh()
        return True

    def delete(self, ref: FileRef, confirmed: bool = False) -> bool:
        if not confirmed:
            return False
        self._clear_feedback()
        try:
            self._require_store().delete(ref)
        except BlogAdminError as e:
            self._fail(f"delete {ref.filename}", e)
            return False

        self._back_to_browsing()
        self.message = f"Deleted {ref.filename}"
        self.refresh()
        return True

    def render_preview(self) -> str:
        if not self.renderer:
            return ""
        try:
            self.preview_html = self.renderer.render(self.preview)
        except BlogAdminError as e:
            self._fail("render preview", e)
        return self.preview_html

    def _require_store(self) -> GitHubPostsRepo:
        if self.store is None or self.state in (
            AdminState.UNAUTHENTICATED,
            AdminState.AUTHENTICATING,
        ):
            raise AuthError("Log in first")
        return self.store

    def _back_to_browsing(self) -> None:
        self._reset_draft()
        self.state = AdminState.BROWSING

    def _reset_draft(self) -> None:
        self.editing = None
        self.draft = PostDraft()
        self.preview = ""
        self.preview_html = ""

    def _clear_feedback(self) -> None:
        self.error = ""
        self.message = ""

    def _fail(self, action: str, error: BlogAdminError) -> None:
        logger.warning(f"Could not {action}: {error}")
        self.error = str(error)
