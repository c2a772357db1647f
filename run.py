"""Development server: ``python run.py [--demo]``.

Production deployments load ``run:app`` through gunicorn instead.
"""

import logging
import os
import sys

from invoice_dashboard import create_app

app, socketio = create_app(sys.argv[1:])
app.debug = os.getenv("DEBUG", "False").lower() in {"1", "true", "t", "yes"}


def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "5000"))
    logging.getLogger(__name__).info("Serving invoice dashboard on %s:%s", host, port)
    socketio.run(app, host=host, port=port, debug=app.debug)


if __name__ == "__main__":
    main()
