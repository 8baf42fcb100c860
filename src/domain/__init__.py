"""Domain layer - statement import business rules.

Structure:
- entities/: Stored records (Transaction)
- enums/: Classification and policy enumerations
- errors/: Error values returned through Result types
- value_objects/: Immutable values (CsvConfiguration, ImportIssue, ...)
- protocols/: Ports implemented by infrastructure or external collaborators

The domain layer has NO dependencies on frameworks or infrastructure.
"""
