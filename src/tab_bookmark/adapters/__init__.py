"""UI adapters hosting tab bookmarks."""
