"""Framework-free foundation layers (domain and application)."""
