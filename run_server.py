#!/usr/bin/env python
"""Development server entrypoint for HabitFlow."""

from habitflow import create_app

if __name__ == "__main__":
    app = create_app()
    app.run(host="127.0.0.1", port=5000, debug=app.config["DEBUG"])
