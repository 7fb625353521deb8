"""HTTP surface for the Task Management API (FastAPI app and uvicorn runner)."""
