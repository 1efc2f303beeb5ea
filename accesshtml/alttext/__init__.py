"""Alt text classification, quality checks and generation."""
