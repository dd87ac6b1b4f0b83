"""Infrastructure: external service adapters (Firebase, TMDB)."""
