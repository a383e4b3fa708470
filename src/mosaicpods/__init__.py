"""mosaicpods — schema-driven pod definition engine for the Mosaic CMS."""

__version__ = "0.4.0"
