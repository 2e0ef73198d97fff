"""
Core decoding: element parser, descriptor assembly and shared models.
"""
