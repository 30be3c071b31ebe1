"""C-Force intel core: AI-assisted passive security intelligence pipelines."""

__version__ = "0.1.0"
