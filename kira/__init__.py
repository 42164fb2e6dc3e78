"""
Kira backend.

AI carbon consultant and invoice-to-carbon pipeline for Malaysian SMEs,
built on FastAPI, Google Gemini (google-genai) and Supabase.
"""

__version__ = "0.1.0"
