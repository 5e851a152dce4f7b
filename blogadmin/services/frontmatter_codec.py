"""
Reader/writer for the frontmatter layout stored posts use:

    ---
    title: 'Some title'
    tags: [a, b]
    ---
    markdown body

The grammar is deliberately informal and line oriented: no multi-line values,
no quote escaping. Existing posts depend on it, so stricter parsing would be a
breaking change.
"""

import logging
import re
from typing import List, Sequence

from blogadmin.schemas.blog import ParsedPost

logger = logging.getLogger(__name__)

DELIMITER = "---"

FRONTMATTER_PATTERN = re.compile(r"\A---\n(.*?)\n---(?:\n(.*))?\Z", re.DOTALL)
TITLE_PATTERN = re.compile(r"^title:[ \t]*['\"]?(.*?)['\"]?[ \t]*$", re.MULTILINE)
TAGS_PATTERN = re.compile(r"^tags:[ \t]*\[(.*?)\]", re.MULTILINE)


def serialize(title: str, tags: Sequence[str], body: str) -> str:
    lines = [DELIMITER, f"title: '{title}'"]
    if tags:
        lines.append(f"tags: [{', '.join(tags)}]")
    lines.append(DELIMITER)
    return "\n".join(lines) + "\n" + body


def parse(text: str) -> ParsedPost:
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        logger.debug("No frontmatter block found, treating whole text as body")
        return ParsedPost(body=text)

    metadata, body = match.group(1), match.group(2) or ""

    title_match = TITLE_PATTERN.search(metadata)
    title = title_match.group(1) if title_match else ""

    tags_match = TAGS_PATTERN.search(metadata)
    tags_text = tags_match.group(1).strip() if tags_match else ""

    return ParsedPost(
        title=title, tags=split_tags(tags_text), tags_text=tags_text, body=body
    )


def split_tags(tags_text: str) -> List[str]:
    return [tag.strip() for tag in tags_text.split(",") if tag.strip()]
