"""
authcore - account registration, login and session tokens.

Layout follows ports and adapters:
  • domain    entities, error taxonomy, input validation
  • ports     Protocol interfaces the service depends on
  • adapters  argon2 hasher, JWT issuer, clocks, account directories
  • services  AuthService orchestration
  • api       FastAPI surface over AuthService
"""

__version__ = "0.1.0"
