"""Infrastructure layer — corpus file access."""
