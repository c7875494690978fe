"""Allow running FrameIt with ``python -m frameit``."""

from .app import main

if __name__ == "__main__":
    main()
