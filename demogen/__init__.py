"""demogen -- scaffolds tracking demo web applications from templates."""

__version__ = "0.1.0"
