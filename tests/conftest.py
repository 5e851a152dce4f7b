import base64
import hashlib
import json
import urllib.parse

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from blogadmin.db.base import Base
from blogadmin.models.post import Post  # noqa: F401  registers the Posts table
from blogadmin.repos.github_posts_repo import GitHubPostsRepo
from blogadmin.services.markdown_renderer import MarkdownRenderer
from blogadmin.settings import RepoConfig

API_URL = "https://api.test"
GOOD_TOKEN = "good-token"


def make_repo_config(**overrides) -> RepoConfig:
    values = {"api_url": API_URL, "owner": "owner", "repo": "repo"}
    values.update(overrides)
    return RepoConfig(**values)


class FakeGitHubAPI:
    """
    Minimal in-memory stand-in for the repository contents API.
    Mount it with httpx.MockTransport; every request is recorded in .requests.
    """

    def __init__(self, files: dict | None = None, posts_path="src/content/blog"):
        self.files = dict(files or {})  # filename -> raw text
        self.extra_entries = [
            {"name": "images", "type": "dir"},
            {"name": "notes.txt", "type": "file"},
        ]
        self.prefix = f"/repos/owner/repo/contents/{posts_path}"
        self.requests: list[httpx.Request] = []
        self.fail_with: Exception | None = None

    @staticmethod
    def sha_of(text: str) -> str:
        return hashlib.sha1(text.encode("utf-8")).hexdigest()

    def sha(self, filename: str) -> str:
        return self.sha_of(self.files[filename])

    def writes(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method in ("PUT", "DELETE")]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=self.transport())

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with:
            raise self.fail_with
        if request.headers.get("Authorization") != f"Bearer {GOOD_TOKEN}":
            return httpx.Response(401, json={"message": "Bad credentials"})

        path = request.url.path
        if path == "/user":
            return httpx.Response(200, json={"login": "octocat"})
        if path == "/markdown" and request.method == "POST":
            payload = json.loads(request.content)
            return httpx.Response(200, text=f"<p>{payload['text']}</p>")
        if path == self.prefix and request.method == "GET":
            return httpx.Response(200, json=self._listing())
        if path.startswith(self.prefix + "/"):
            name = urllib.parse.unquote(path[len(self.prefix) + 1 :])
            return self._file(request, name)
        return httpx.Response(404, json={"message": "Not Found"})

    def _listing(self) -> list[dict]:
        entries = [
            {
                "name": name,
                "sha": self.sha(name),
                "type": "file",
                "url": f"{API_URL}{self.prefix}/{name}",
            }
            for name in sorted(self.files)
        ]
        extras = [{**e, "sha": "x" * 40, "url": f"{API_URL}/other"} for e in self.extra_entries]
        return entries + extras

    def _file(self, request: httpx.Request, name: str) -> httpx.Response:
        if request.method == "GET":
            if name not in self.files:
                return httpx.Response(404, json={"message": "Not Found"})
            encoded = base64.b64encode(self.files[name].encode("utf-8")).decode()
            # the real API wraps base64 content every 60 characters
            wrapped = "\n".join(encoded[i : i + 60] for i in range(0, len(encoded), 60))
            return httpx.Response(
                200,
                json={"name": name, "sha": self.sha(name), "content": wrapped + "\n"},
            )

        body = json.loads(request.content)
        if request.method == "PUT":
            if name in self.files:
                if "sha" not in body:
                    return httpx.Response(
                        422,
                        json={"message": 'Invalid request.\n\n"sha" wasn\'t supplied.'},
                    )
                if body["sha"] != self.sha(name):
                    return httpx.Response(
                        409, json={"message": f"{name} does not match {body['sha']}"}
                    )
            self.files[name] = base64.b64decode(body["content"]).decode("utf-8")
            return httpx.Response(
                201 if "sha" not in body else 200,
                json={"content": {"name": name, "sha": self.sha(name)}},
            )

        if request.method == "DELETE":
            if name not in self.files:
                return httpx.Response(404, json={"message": "Not Found"})
            if body.get("sha") != self.sha(name):
                return httpx.Response(
                    409, json={"message": f"{name} does not match {body.get('sha')}"}
                )
            del self.files[name]
            return httpx.Response(200, json={"content": None})

        return httpx.Response(405, json={"message": "Method Not Allowed"})


@pytest.fixture
def github():
    return FakeGitHubAPI(
        {
            "hello-world.md": "---\ntitle: 'Hello World'\ntags: [intro, meta]\n---\nFirst post.",
            "draft.mdx": "No frontmatter here",
        }
    )


@pytest.fixture
def repo(github):
    return GitHubPostsRepo(make_repo_config(), GOOD_TOKEN, client=github.client())


def make_store_factory(github: FakeGitHubAPI):
    def factory(token: str) -> GitHubPostsRepo:
        return GitHubPostsRepo(make_repo_config(), token, client=github.client())

    return factory


def make_renderer_factory(github: FakeGitHubAPI):
    def factory(token: str) -> MarkdownRenderer:
        return MarkdownRenderer(make_repo_config(), token, client=github.client())

    return factory


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


class FakeTableRepo:
    """
    Minimal table repo stand-in for router tests.
    """

    def __init__(self, posts=None):
        self.posts = {p["id"]: p for p in (posts or [])}
        self.deleted = []

    def list(self):
        return list(self.posts.values())

    def read(self, post_id: int):
        return self.posts.get(post_id)

    def create(self, data):
        post_id = max(self.posts, default=0) + 1
        self.posts[post_id] = {"id": post_id, "published_at": None, **data.model_dump()}
        return self.posts[post_id]

    def update(self, post_id: int, data):
        if post_id not in self.posts:
            return None
        self.posts[post_id] = {**self.posts[post_id], **data.model_dump()}
        return self.posts[post_id]

    def delete(self, post_id: int):
        self.deleted.append(post_id)
        self.posts.pop(post_id, None)
