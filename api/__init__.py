"""api/ -- FastAPI application, routes and HTTP transport models."""
