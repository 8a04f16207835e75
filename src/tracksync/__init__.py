"""tracksync - Sync open YouTrack sprint issues into a local task list."""

__version__ = "0.1.0"
