import os
import socket

from subsidy_browser.logging_config import configure_logging
from subsidy_browser.ui.dash_app import create_dash_app

DEFAULT_PORT = 8051
PORT_SEARCH_SPAN = 100

configure_logging()

app = create_dash_app(os.getenv("SUBSIDY_BROWSER_CONFIG", "config"))
# WSGI entry point, e.g. `gunicorn app:server`
server = app.server


def find_free_port(start_port: int) -> int:
    """First port at or above start_port with nothing listening on localhost."""
    for port in range(start_port, start_port + PORT_SEARCH_SPAN):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            if s.connect_ex(("localhost", port)) != 0:
                return port
    return start_port


def main() -> None:
    preferred_port = int(os.getenv("PORT", str(DEFAULT_PORT)))
    port = find_free_port(preferred_port)
    if port != preferred_port:
        print(f"Port {preferred_port} is busy; serving the subsidy browser on {port}")

    app.run(host="0.0.0.0", port=port, debug=os.getenv("DEBUG", "0") == "1")


if __name__ == "__main__":
    main()
