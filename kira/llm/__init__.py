"""
Model invocation layer (Google Gemini via google-genai).
"""

from .client import GeminiModelClient, ToolCaller
from .media import decode_data_uri, encode_data_uri, load_document, sniff_base64_mime_type

__all__ = [
    "GeminiModelClient",
    "ToolCaller",
    "decode_data_uri",
    "encode_data_uri",
    "load_document",
    "sniff_base64_mime_type",
]
