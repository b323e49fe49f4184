"""User API: user and account CRUD service."""
