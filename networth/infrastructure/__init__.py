"""Infrastructure layer - adapters implementing domain protocols.

Structure:
- security/: AES-256-GCM encryption service
- logging/: structlog console adapter
- persistence/: async SQLAlchemy models, database and repositories
- providers/: price provider API clients
- rate_limit/: provider call budget tracker
"""
