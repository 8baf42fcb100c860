"""Application layer - Statement import use case.

Structure:
- commands/: ImportStatement command and its handler
- dtos/: TransactionDraft and ImportResult
- services/: Format resolution, normalization, duplicate detection, tally

The application layer orchestrates domain logic; parsing lives in
infrastructure and persistence is reached only through domain protocols.
"""
