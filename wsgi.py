# wsgi.py — WSGI entry point, e.g. `gunicorn wsgi:app`. Settings are read once here.
from app import create_app

app = create_app()
