"""SQLAlchemy persistence for userhub."""
