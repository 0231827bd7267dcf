"""Project root entry point for launching the web interface."""

from __future__ import annotations

from arb_extractor.config import load_config


def main():
    from arb_extractor.web import create_app

    server = load_config().get("server", {})
    app = create_app()
    app.run(host=server.get("host", "127.0.0.1"), port=int(server.get("port", 5500)))


if __name__ == "__main__":
    main()
