"""Route modules for the notes API."""
