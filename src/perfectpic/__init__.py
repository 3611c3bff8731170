"""Perfect Pic settings backend: dynamic settings store, admin and bootstrap services."""
