"""archkit - Prompt template extraction and rendering."""

__version__ = "0.1.0"
