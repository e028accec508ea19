"""Request/response collaborators for cookie handling."""
