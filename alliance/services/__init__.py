"""Business logic over the ORM models."""
