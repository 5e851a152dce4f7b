import logging
import urllib.parse
from typing import List, Optional

import httpx

from blogadmin.db.github import get_github_client, json_body, send
from blogadmin.errors import RemoteError, ValidationError
from blogadmin.schemas.blog import FileRef, Post, PostDraft
from blogadmin.services import frontmatter_codec
from blogadmin.settings import RepoConfig
from blogadmin.utils import (
    decode_transport,
    derive_filename,
    encode_transport,
    is_content_file,
)

logger = logging.getLogger(__name__)


def validate_draft(draft: PostDraft) -> None:
    if not draft.title.strip() or not draft.body.strip():
        raise ValidationError("Title and content required")


class GitHubPostsRepo:
    """Posts stored as frontmatter markdown files, reached through the contents API."""

    def __init__(
        self, config: RepoConfig, token: str, client: Optional[httpx.Client] = None
    ):
        self.config = config
        self.token = token
        self.client = client or get_github_client(config)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self) -> None:
        self.client.close()

    def whoami(self) -> str:
        response = send(
            self.client, "GET", f"{self.config.api_url.rstrip('/')}/user", self.token
        )
        return json_body(response).get("login", "")

    def list(self) -> List[FileRef]:
        logger.debug(f"Listing posts under {self.config.posts_path}")
        response = send(
            self.client,
            "GET",
            self.config.contents_url,
            self.token,
            params=self._ref_params(),
        )
        entries = json_body(response, expected=list)

        return [
            FileRef(filename=entry["name"], sha=entry["sha"], url=entry.get("url"))
            for entry in entries
            if is_content_file(entry.get("name", ""), self.config.content_suffixes)
        ]

    def ref_for(self, filename: str, sha: str = "") -> FileRef:
        return FileRef(filename=filename, sha=sha, url=self._file_url(filename))

    def read(self, ref: FileRef) -> Post:
        url = ref.url or self._file_url(ref.filename)
        params = None if "?" in url else self._ref_params()
        response = send(self.client, "GET", url, self.token, params=params)
        payload = json_body(response)
        if "content" not in payload:
            raise RemoteError(
                f"Could not read {ref.filename}", status_code=response.status_code
            )

        parsed = frontmatter_codec.parse(decode_transport(payload["content"]))
        return Post(
            filename=ref.filename,
            title=parsed.title,
            tags=parsed.tags,
            body=parsed.body,
            sha=payload.get("sha", ref.sha),
        )

    def create(self, draft: PostDraft) -> Post:
        validate_draft(draft)
        filename = derive_filename(draft.title)
        post = self._write(filename, draft, sha=None, message=f"Create post {filename}")
        logger.info(f"Created post {filename}")
        return post

    def update(self, ref: FileRef, draft: PostDraft) -> Post:
        validate_draft(draft)
        post = self._write(
            ref.filename, draft, sha=ref.sha, message=f"Update post {ref.filename}"
        )
        logger.info(f"Updated post {ref.filename}")
        return post

    def delete(self, ref: FileRef) -> None:
        body = {"message": f"Delete post {ref.filename}", "sha": ref.sha}
        if self.config.branch:
            body["branch"] = self.config.branch
        send(self.client, "DELETE", self._file_url(ref.filename), self.token, json=body)
        logger.info(f"Deleted post {ref.filename}")

    def _write(
        self, filename: str, draft: PostDraft, *, sha: Optional[str], message: str
    ) -> Post:
        tags = frontmatter_codec.split_tags(draft.tags_text)
        text = frontmatter_codec.serialize(draft.title, tags, draft.body)

        body = {"message": message, "content": encode_transport(text)}
        if sha:
            body["sha"] = sha
        if self.config.branch:
            body["branch"] = self.config.branch

        response = send(
            self.client, "PUT", self._file_url(filename), self.token, json=body
        )
        new_sha = (json_body(response).get("content") or {}).get("sha", "")
        return Post(
            filename=filename, title=draft.title, tags=tags, body=draft.body, sha=new_sha
        )

    def _file_url(self, filename: str) -> str:
        return f"{self.config.contents_url}/{urllib.parse.quote(filename)}"

    def _ref_params(self) -> Optional[dict]:
        return {"ref": self.config.branch} if self.config.branch else None
