"""CMS-first question set and results pack resolution with revision pinning and bundled fallback."""
