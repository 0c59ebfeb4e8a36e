"""Config Warden - configuration file formatter and secret scanner."""

__version__ = "0.1.0"
