"""Business logic for the admin write path."""
