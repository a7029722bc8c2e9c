# src/printlite/__init__.py
"""
PrintLite - Print-on-Demand Ordering Core

Pricing engine and order lifecycle management for the PrintLite storefront:
customers configure print options for uploaded documents, receive a computed
INR price with 18% GST, check out, and track their orders while administrators
move orders through the fulfilment statuses.
"""

__version__ = "1.0.0"
__author__ = "PrintLite Team"
