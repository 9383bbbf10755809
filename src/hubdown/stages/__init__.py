"""Built-in pipeline stages — auto-registered on import."""

from hubdown.stages.autolink import autolink_headings
from hubdown.stages.emoji import gemoji_to_emoji
from hubdown.stages.highlight import highlight_code
from hubdown.stages.parse import markdown_parser
from hubdown.stages.raw import reembed_raw
from hubdown.stages.slug import Slugger, heading_ids
from hubdown.stages.stringify import serialize_html
from hubdown.stages.tree import tokens_to_tree

__all__ = [
    "markdown_parser",
    "gemoji_to_emoji",
    "tokens_to_tree",
    "heading_ids",
    "autolink_headings",
    "highlight_code",
    "reembed_raw",
    "serialize_html",
    "Slugger",
]
