"""Built-in annotation pipeline backends; each module exposes a ``BACKEND_SPEC``."""
