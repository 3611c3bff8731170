"""Infrastructure adapters: persistence, auth, mail, observability and HTTP."""
