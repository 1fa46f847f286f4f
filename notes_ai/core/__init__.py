"""Core logic for the notes API: AI error handling, retries, and note workflows."""
