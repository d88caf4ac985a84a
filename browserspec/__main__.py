# browserspec/__main__.py
"""
Main entry point for running browserspec as `python -m browserspec`.
"""
from browserspec.cli import app

if __name__ == "__main__":
    app()
