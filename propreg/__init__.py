"""propreg — property image registry.

Associates property records (real estate, cars, art, anything else) with the
SHA-256 digest of an uploaded image, keyed by a caller-supplied id.
"""

__version__ = "0.1.0"
