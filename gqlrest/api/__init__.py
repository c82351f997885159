"""HTTP API layer (FastAPI).

Exposes a small `/api/v1` surface:
- translate an upstream GraphQL execution result into a RESTful envelope or a GraphQL body
- health / version endpoints

The API is intentionally thin: translation behavior lives in `gqlrest.translate`.
"""
