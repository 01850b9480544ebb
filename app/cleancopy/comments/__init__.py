"""Comment removal for JavaScript and TypeScript sources."""

from cleancopy.comments.stripper import CommentStripError, strip_comments

__all__ = ["CommentStripError", "strip_comments"]
