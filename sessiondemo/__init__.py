"""An HTTP account service: register, log in, list, edit and close accounts stored in SQLite."""

__version__ = "0.1.0"
__all__ = ["__version__"]