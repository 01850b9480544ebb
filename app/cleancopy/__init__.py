"""cleancopy - Copy a source tree and strip comments from the copy.

The original tree is never modified. JavaScript and TypeScript files in
the destination are rewritten without comments, honoring exclusion
patterns and an ownership marker that guards the destination directory.
"""

__version__ = "0.3.0"
