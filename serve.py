#!/usr/bin/env python3
"""Serve the generated results page locally for preview."""

import http.server
import socketserver
import sys
import webbrowser
from functools import partial
from pathlib import Path

import eventfinder.config as cfg_module

PORT = 8000


class Handler(http.server.SimpleHTTPRequestHandler):
    def log_message(self, format, *args):
        print(f"  {self.command} {self.path}")


def main():
    config_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("config.toml")
    output_dir = cfg_module.get_output_dir(cfg_module.load(config_path))

    if not output_dir.exists() or not any(output_dir.iterdir()):
        print(f"'{output_dir}' is empty or missing. Run 'ef search <city>' first.")
        return

    url = f"http://localhost:{PORT}"
    print(f"Serving '{output_dir}/' at {url}")
    print("Press Ctrl+C to stop.\n")
    webbrowser.open(url)

    handler = partial(Handler, directory=str(output_dir))
    with socketserver.TCPServer(("", PORT), handler) as httpd:
        httpd.allow_reuse_address = True
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")


if __name__ == "__main__":
    main()
