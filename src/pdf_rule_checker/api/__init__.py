"""HTTP layer -- FastAPI app factory, routes, middleware."""
