"""Infrastructure shared by the core packages."""
