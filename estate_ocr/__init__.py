"""Real Estate Document OCR.

Extracts buyer, seller, property address, key dates and offer price
from Tesseract OCR text of scanned real-estate documents using layered
regex patterns with a line-oriented keyword fallback.
"""
