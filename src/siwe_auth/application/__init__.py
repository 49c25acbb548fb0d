"""Application layer - verification use case and DTOs."""
