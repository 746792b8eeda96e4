"""Online bookstore backend built on Protean and FastAPI."""
