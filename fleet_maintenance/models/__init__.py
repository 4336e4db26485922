"""
Fleet Maintenance Core
Database handle shared by the storage backend and migrations.
"""

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
