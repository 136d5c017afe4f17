# riddlebox/extensions.py
from flask_sqlalchemy import SQLAlchemy

# Single, shared instance used across the app
db = SQLAlchemy()
