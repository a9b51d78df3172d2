# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the song catalog's business logic:
# - models/: Pydantic schemas for song records
# - services/: validation, normalization, datastore access, form controller
#
# Code in this package should NOT import from FastAPI directly.
# =============================================================================
