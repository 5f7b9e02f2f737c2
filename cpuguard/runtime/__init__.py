"""Container-runtime clients (the Docker adapter and its abstract interface)."""
