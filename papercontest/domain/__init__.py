"""Domain vocabulary shared by every feature module."""
