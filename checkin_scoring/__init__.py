"""Task scoring engine for daily check-ins."""
