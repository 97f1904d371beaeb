"""WSGI entrypoint for Gunicorn.

Usage:
  gunicorn -w 2 -b 0.0.0.0:3000 wsgi:app
"""

from quina import create_app

app = create_app()
