"""btnu - back that NAS up."""

__version__ = "0.1.0"
