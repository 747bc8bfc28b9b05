"""
Resistor scanner services: color classification and the decoding pipeline.
"""
