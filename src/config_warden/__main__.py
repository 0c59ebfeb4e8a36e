"""Entry point for running Config Warden as a module.

Usage:
    python -m config_warden [OPTIONS] COMMAND [ARGS]...
"""

from config_warden.cli.app import app

if __name__ == "__main__":
    app()
