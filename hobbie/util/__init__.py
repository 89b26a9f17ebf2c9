"""Small helpers shared by schemas and routes."""
