"""Infrastructure: backend collaborators (persistence, auth, cache, reports)."""
