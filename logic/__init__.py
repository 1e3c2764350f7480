"""logic package."""
