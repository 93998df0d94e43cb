"""Command-line app for termvid."""
