"""Helpers around the core that talk to external collaborators."""

from pixcore.utils.image_io import read_buffer, read_image, write_buffer, write_image

__all__ = ["read_buffer", "read_image", "write_buffer", "write_image"]
