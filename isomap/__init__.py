# -----------------------------------------------------------------------------
# ISO MAP
# -----------------------------------------------------------------------------
# Resolves current Windows installation image URLs for a set of version keys
# and writes them as a key -> URL JSON document.
# -----------------------------------------------------------------------------

__version__ = "1.0.0"
