"""Domain layer - business rules for user accounts."""
