"""Service layer: file-level document operations returning ServiceResult.

Services may import from domain, codecs, and config layers.
They must never import from commands or output.
"""
