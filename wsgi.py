#!/usr/bin/env python3
"""
WSGI entry point and the ``scholarflow`` console script.
"""
import os

from app import create_app

app = create_app()


def main():
    port = int(os.environ.get('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=app.config.get('DEBUG', False))


if __name__ == "__main__":
    main()
