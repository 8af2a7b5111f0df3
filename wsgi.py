# wsgi.py
import os
from app import create_app

# keep FLASK_ENV/DEBUG from enabling debug mode in production
os.environ.setdefault('FLASK_ENV', 'production')

app = create_app()

# exposed for gunicorn: wsgi:app
