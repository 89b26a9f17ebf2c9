# wsgi.py (at repo root): gunicorn wsgi:app
from hobbie import create_app

app = create_app()
