"""Text-mode interface for human players."""
