"""Domain layer shared by all tollgate modules."""
