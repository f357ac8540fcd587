# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Equipos API:
# - test_loan_status.py, test_utils.py, test_models.py: Pure unit tests
# - test_auth.py: Token validation and admin session routes
# - test_assets.py, test_loans.py, test_tickets.py, test_users.py,
#   test_lookups.py, test_dashboard.py: Endpoint tests against the
#   in-memory Supabase stand-in from conftest.py
#
# Run tests with: poetry run pytest
# =============================================================================
