"""
Print-shop order tracker: order lifecycle, customer loyalty and analytics.
"""
__version__ = "1.0.0"
