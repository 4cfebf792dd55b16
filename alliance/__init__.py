"""Alliance: donor management and fund accounting behind session authentication."""

__version__ = "0.1.0"
