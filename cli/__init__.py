"""HTML packager command line."""
