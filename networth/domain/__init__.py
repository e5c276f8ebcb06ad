"""Domain layer - Pure business logic.

Structure:
- entities/: Domain entities (Credential, StockPrice)
- value_objects/: Value objects (credential payloads, price quotes, budgets)
- protocols/: Domain protocols (repository and service interfaces)
- errors/: Domain error types returned inside Result values

The domain layer has NO dependencies on any framework or infrastructure.
"""
