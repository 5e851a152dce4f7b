from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class RepoConfig(BaseModel):
    """Where the file-backed posts live. Passed explicitly to the store client."""

    api_url: str = "https://api.github.com"
    owner: str
    repo: str
    posts_path: str = "src/content/blog"
    branch: Optional[str] = None
    content_suffixes: Tuple[str, ...] = (".md", ".mdx")
    timeout_seconds: float = 10.0

    @property
    def contents_url(self) -> str:
        path = self.posts_path.strip("/")
        return f"{self.api_url.rstrip('/')}/repos/{self.owner}/{self.repo}/contents/{path}"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Remote repository holding the markdown posts
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_OWNER: str = ""
    GITHUB_REPO: str = ""
    GITHUB_BRANCH: Optional[str] = None
    POSTS_PATH: str = "src/content/blog"
    CONTENT_SUFFIXES: str = ".md,.mdx"
    GITHUB_TIMEOUT_SECONDS: float = 10.0

    # Relational posts table
    DATABASE_URL: str = "sqlite:///./blog.db"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Our own API Key
    ADMIN_API_KEY: str = ""

    @property
    def content_suffixes(self) -> Tuple[str, ...]:
        return tuple(s.strip() for s in self.CONTENT_SUFFIXES.split(",") if s.strip())

    @property
    def repo_config(self) -> RepoConfig:
        return RepoConfig(
            api_url=self.GITHUB_API_URL,
            owner=self.GITHUB_OWNER,
            repo=self.GITHUB_REPO,
            posts_path=self.POSTS_PATH,
            branch=self.GITHUB_BRANCH,
            content_suffixes=self.content_suffixes,
            timeout_seconds=self.GITHUB_TIMEOUT_SECONDS,
        )


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
