"""Image variants: upload, resize and watermark images with stored lineage."""

__version__ = "0.1.0"
