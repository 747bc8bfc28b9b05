"""
Image loading and visual logging helpers.
"""
