"""
Business Valuation Service
==========================

FastAPI wrapper around ``bizval_engine``: request validation, listing-source
connectors and JSON-safe responses. All valuation logic lives in the engine.
"""
