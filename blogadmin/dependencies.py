from fastapi import Depends

from blogadmin.db.base import get_db
from blogadmin.repos.github_posts_repo import GitHubPostsRepo
from blogadmin.repos.table_posts_repo import TablePostsRepo
from blogadmin.security import get_github_token, get_settings
from blogadmin.services.markdown_renderer import MarkdownRenderer


def get_table_posts_repo(db=Depends(get_db)):
    return TablePostsRepo(db)


def get_posts_store(
    token: str = Depends(get_github_token),
    current_settings=Depends(get_settings),
):
    store = GitHubPostsRepo(current_settings.repo_config, token)
    try:
        yield store
    finally:
        store.close()


def get_markdown_renderer(
    token: str = Depends(get_github_token),
    current_settings=Depends(get_settings),
):
    renderer = MarkdownRenderer(current_settings.repo_config, token)
    try:
        yield renderer
    finally:
        renderer.close()
