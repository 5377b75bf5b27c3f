"""SQLAlchemy infrastructure shared by the warden packages."""
