"""
Quick demo script to run the Kira API locally.

This script starts a local server and shows how to make requests to it.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Kira Backend Demo")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:      GET  http://localhost:8000/health")
    print("   - Chat with Kira:    POST http://localhost:8000/chat")
    print("   - Process Receipt:   POST http://localhost:8000/receipts/process")
    print("   - Extract Invoice:   POST http://localhost:8000/invoices/extract")
    print("   - Categorise Items:  POST http://localhost:8000/invoices/categorise")
    print("   - API Docs:               http://localhost:8000/docs")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/chat" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"userId": "user123", "message": "How do I compare to my industry?"}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "kira.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
