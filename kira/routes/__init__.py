"""
API routes for Kira backend.

All route modules are imported and registered in main.py
"""
