# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Image Management API:
# - test_models.py: Request/response schema validation
# - test_security.py: Password hashing and access tokens
# - test_storage_service.py: Filesystem storage
# - test_image_service.py: Image service against a real session
# - test_users_api.py / test_auth_api.py / test_images_api.py: HTTP endpoints
# - test_health.py: Health checks and error envelope for unknown routes
# - test_exceptions.py: Error handlers and CORS origins
# - test_threadpool.py: Blocking endpoints run off the event loop
#
# Run tests with: pytest
# =============================================================================
