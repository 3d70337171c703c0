"""Core type definitions."""

from typing import NewType

# URL path on the vanity domain (e.g., "/go-utils"), always with a leading slash
URLPath = NewType("URLPath", str)
