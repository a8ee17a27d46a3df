"""DataBias Scanner backend.

Importable as ``backend`` so ``uvicorn backend.main:app`` and the test suite
both resolve the FastAPI app from the repository root.
"""
