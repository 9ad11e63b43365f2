"""
Entry point for running omni as a module: python -m omni
"""

from omni.cli.commands import app

if __name__ == "__main__":
    app()
