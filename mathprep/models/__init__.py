"""
API request/response schemas (Pydantic).

One module per resource; routers import the schemas they serve.
"""
