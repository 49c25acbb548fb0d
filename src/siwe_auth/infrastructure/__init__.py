"""Infrastructure layer - adapters for parsing, crypto, chain access and logging."""
