# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the HTTP layer:
# - models/: Pydantic schemas, status enums and loan status derivation
# - services/: One service class per resource, wrapping the Supabase client
# - validation.py: Required-field and integer checks for request bodies
#
# Services raise the exceptions in app/exceptions.py but never touch
# requests or responses. This keeps the logic testable and reusable.
# =============================================================================
