"""Content validation, hashing, bundled files and CSV import."""
