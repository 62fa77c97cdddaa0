"""Terminal editor for posts."""
