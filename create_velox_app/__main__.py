"""Entry point for ``python -m create_velox_app``."""

from create_velox_app.cli import main

if __name__ == "__main__":
    main()
