"""Release and promotion workflows."""
