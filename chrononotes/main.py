"""Main entry point for the ChronoNotes application."""

import logging
import os
import sys

from chrononotes.ui.application import create_application


def main():
    """
    Run the ChronoNotes application.
    """
    logging.basicConfig(
        level=os.environ.get("CHRONONOTES_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app, _window = create_application()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
