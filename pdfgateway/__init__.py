"""
PDF Gateway - render HTML and product catalogs to PDF with headless Chromium.
"""

__version__ = "0.1.0"
SERVICE_NAME = "pdf-gateway"
