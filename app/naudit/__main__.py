"""Allow running naudit as ``python -m naudit``."""

from naudit.cli.main import app

if __name__ == "__main__":
    app(prog_name="naudit")
