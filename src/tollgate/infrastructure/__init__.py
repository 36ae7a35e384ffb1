"""Infrastructure helpers shared by tollgate consumers."""
