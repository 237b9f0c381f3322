"""Save and restore editor tab layouts as named bookmarks."""

__all__ = [
    "actions",
    "adapters",
    "errors",
    "host",
    "naming",
    "prompts",
    "runtime",
    "store",
]

__version__ = "0.1.0"
