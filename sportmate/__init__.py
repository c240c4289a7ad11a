"""SportMate booking and social coordination service."""
