import logging
from typing import Optional

import httpx

from blogadmin.db.github import get_github_client, send
from blogadmin.settings import RepoConfig

logger = logging.getLogger(__name__)


class MarkdownRenderer:
    """Turns markdown into HTML via the hosting API's render endpoint. Preview only."""

    def __init__(
        self, config: RepoConfig, token: str, client: Optional[httpx.Client] = None
    ):
        self.config = config
        self.token = token
        self.client = client or get_github_client(config)

    def close(self) -> None:
        self.client.close()

    def render(self, text: str, mode: str = "gfm") -> str:
        if not text:
            return ""
        url = f"{self.config.api_url.rstrip('/')}/markdown"
        body = {"text": text, "mode": mode}
        if mode == "gfm":
            body["context"] = f"{self.config.owner}/{self.config.repo}"
        response = send(self.client, "POST", url, self.token, json=body)
        logger.debug(f"Rendered {len(text)} chars of markdown")
        return response.text
