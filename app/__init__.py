"""Entry points: FastAPI application and command-line driver."""
