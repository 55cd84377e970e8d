"""GitHub repository statistics."""
