"""
Input data normalization module.

Converts caller-supplied mappings into the immutable projection models.
"""
