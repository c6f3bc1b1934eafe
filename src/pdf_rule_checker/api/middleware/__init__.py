"""Request guards applied before route handlers."""
