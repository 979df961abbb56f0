"""Runtime wiring: settings loading and logging setup."""
