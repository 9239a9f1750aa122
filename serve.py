#!/usr/bin/env python3
"""Run the site locally for preview, using config.toml and the secrets file in the current directory."""

import logging

import musicals.config as cfg_module
from musicals.server import create_app

PORT = 8000


def main():
    logging.basicConfig(level=logging.INFO)
    cfg = cfg_module.load()
    username, password = cfg_module.get_admin_credentials(cfg)
    if not (username and password):
        print("ADMIN_USERNAME / ADMIN_PASSWORD are not set; /admin will reject every login.")

    url = f"http://localhost:{PORT}"
    print(f"Serving London Musicals at {url} (admin at {url}/admin/)")
    print("Press Ctrl+C to stop.\n")
    create_app(cfg).run(host="127.0.0.1", port=PORT)


if __name__ == "__main__":
    main()
