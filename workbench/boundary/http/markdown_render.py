"""
Markdown to email-safe HTML.

Dependencies: markdown, nh3
System role: Summary email rendering
"""

import markdown
import nh3

ALLOWED_TAGS = nh3.ALLOWED_TAGS | {"img"}
ALLOWED_ATTRIBUTES = {
    **nh3.ALLOWED_ATTRIBUTES,
    "img": {"src", "alt", "title", "width", "height"},
}


def render_markdown_email(markdown_text: str) -> str:
    """
    Render agent markdown and sanitize it for an HTML email body.

    Args:
        markdown_text: Raw markdown produced by the agent

    Returns:
        str: Sanitized HTML
    """
    html = markdown.markdown(markdown_text or "", extensions=["tables", "fenced_code"])
    return nh3.clean(html, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES)
