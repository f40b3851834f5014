"""Domain layer: the XRD document model and its error kinds.

This layer depends only on stdlib.
It must never import from codecs, services, commands, or config.
"""
