"""Allow ``python -m file_editor``."""

from file_editor.cli import app

if __name__ == "__main__":
    app()
