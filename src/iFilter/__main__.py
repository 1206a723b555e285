"""Allow ``python -m iFilter`` to launch the application."""

from .gui.app import main

if __name__ == "__main__":
    raise SystemExit(main())
