"""Run the mirror archive CLI: python -m mirror_archive"""

from .main import cli

if __name__ == "__main__":
    cli()
